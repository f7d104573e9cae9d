"""Type registry bridge: resolve classes and attribute definitions."""

from attr_validator.registry.base import (
    NAMESPACE_SEPARATOR,
    MemberDescriptor,
    MethodDescriptor,
    StructuralDescriptor,
    TypeRegistry,
    normalize_name,
)
from attr_validator.registry.php import PhpReflectionRegistry
from attr_validator.registry.static import StaticTypeRegistry

__all__ = [
    "NAMESPACE_SEPARATOR",
    "MemberDescriptor",
    "MethodDescriptor",
    "PhpReflectionRegistry",
    "StaticTypeRegistry",
    "StructuralDescriptor",
    "TypeRegistry",
    "normalize_name",
]
