"""Custom exceptions for attr-validator."""

from typing import Any


class AttrValidatorError(Exception):
    """Base exception for all attr-validator errors."""


class InvalidPathError(AttrValidatorError):
    """Raised when the analysis root does not exist or is not a PHP source file."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path} {reason}")


class ConfigError(AttrValidatorError):
    """Raised when environment configuration is invalid."""


class ScanError(AttrValidatorError):
    """Raised when a file's declarations are structurally invalid.

    ``record`` holds the declarations captured before the failure.
    """

    def __init__(self, message: str, source_path: str, record: Any = None):
        self.source_path = source_path
        self.record = record
        super().__init__(message)


class DuplicateNamespaceError(ScanError):
    """Raised when a namespace is declared twice or after a declaration."""

    def __init__(self, namespace: str, source_path: str, record: Any = None):
        self.namespace = namespace
        super().__init__(
            f"Namespace '{namespace}' must be defined first in {source_path}",
            source_path,
            record,
        )


class DuplicateDeclarationError(ScanError):
    """Raised when the same name is declared twice for one kind within a file."""

    def __init__(self, kind: str, name: str, source_path: str, record: Any = None):
        self.kind = kind
        self.name = name
        super().__init__(
            f"{kind} {name} has already been found in {source_path}",
            source_path,
            record,
        )


class RegistryError(AttrValidatorError):
    """Raised when the type registry fails to load or reflect a type."""
