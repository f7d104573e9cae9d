"""Data models for per-file declaration scanning."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Sequence


class DeclarationKind(Enum):
    """Top-level structural declaration kinds."""

    CLASS = "class"
    TRAIT = "trait"
    INTERFACE = "interface"
    ABSTRACT = "abstract"


def _empty_buckets() -> dict[DeclarationKind, list[str]]:
    return {kind: [] for kind in DeclarationKind}


class _DeclarationCounts:
    declarations: Mapping[DeclarationKind, Sequence[str]]

    @property
    def total(self) -> int:
        return sum(len(names) for names in self.declarations.values())

    def has_declarations(self) -> bool:
        return any(self.declarations.values())

    def names(self, kind: DeclarationKind) -> Sequence[str]:
        return self.declarations[kind]

    def sole_declaration(self) -> tuple[DeclarationKind, str] | None:
        """Return (kind, name) when exactly one declaration was recorded."""
        if self.total != 1:
            return None
        for kind, names in self.declarations.items():
            if names:
                return kind, names[0]
        return None


@dataclass
class DeclarationRecord(_DeclarationCounts):
    """Declarations found in one source file.

    ``namespace`` is set at most once, before any declaration is recorded.
    Names are unique within each bucket.
    """

    source_path: str
    namespace: str | None = None
    declarations: dict[DeclarationKind, list[str]] = field(default_factory=_empty_buckets)
    error: str | None = None  # set when a scan error was downgraded to suspicion

    def freeze(self) -> FrozenDeclarationRecord:
        return FrozenDeclarationRecord(
            source_path=self.source_path,
            namespace=self.namespace,
            declarations=MappingProxyType(
                {kind: tuple(names) for kind, names in self.declarations.items()}
            ),
            error=self.error,
        )


@dataclass(frozen=True)
class FrozenDeclarationRecord(_DeclarationCounts):
    """Read-only copy of a :class:`DeclarationRecord`, as kept by a report."""

    source_path: str
    namespace: str | None
    declarations: Mapping[DeclarationKind, tuple[str, ...]]
    error: str | None = None


@dataclass(frozen=True)
class SideRegistryEntry:
    """A file whose sole declaration is a trait, interface or abstract class."""

    namespace: str | None
    source_path: str
    names: tuple[str, ...]


@dataclass(frozen=True)
class SideRegistryItem:
    """One flattened name from a side registry entry."""

    namespace: str | None
    source_path: str
    name: str
