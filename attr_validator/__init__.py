"""attr-validator: find ghost PHP attributes whose defining class does not load."""

__version__ = "0.1.0"

from attr_validator.analyzer import AttributeAnalyzer, analyze
from attr_validator.config import AnalyzerSettings, load_settings
from attr_validator.exceptions import (
    AttrValidatorError,
    ConfigError,
    DuplicateDeclarationError,
    DuplicateNamespaceError,
    InvalidPathError,
    RegistryError,
    ScanError,
)
from attr_validator.models import (
    AnomalousType,
    CleanType,
    DeclarationKind,
    DeclarationRecord,
    NotFoundEntry,
    SideRegistryEntry,
)
from attr_validator.registry import (
    PhpReflectionRegistry,
    StaticTypeRegistry,
    StructuralDescriptor,
    TypeRegistry,
)
from attr_validator.report import Report

__all__ = [
    "AnalyzerSettings",
    "AnomalousType",
    "AttrValidatorError",
    "AttributeAnalyzer",
    "CleanType",
    "ConfigError",
    "DeclarationKind",
    "DeclarationRecord",
    "DuplicateDeclarationError",
    "DuplicateNamespaceError",
    "InvalidPathError",
    "NotFoundEntry",
    "PhpReflectionRegistry",
    "RegistryError",
    "Report",
    "ScanError",
    "SideRegistryEntry",
    "StaticTypeRegistry",
    "StructuralDescriptor",
    "TypeRegistry",
    "analyze",
    "load_settings",
]
