"""Data models for declarations and validation outcomes."""

from attr_validator.models.declaration import (
    DeclarationKind,
    DeclarationRecord,
    FrozenDeclarationRecord,
    SideRegistryEntry,
    SideRegistryItem,
)
from attr_validator.models.findings import (
    AnomalousType,
    AttributeFindings,
    CleanType,
    NotFoundEntry,
    ValidationOutcome,
)

__all__ = [
    "AnomalousType",
    "AttributeFindings",
    "CleanType",
    "DeclarationKind",
    "DeclarationRecord",
    "FrozenDeclarationRecord",
    "NotFoundEntry",
    "SideRegistryEntry",
    "SideRegistryItem",
    "ValidationOutcome",
]
