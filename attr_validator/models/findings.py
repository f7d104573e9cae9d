"""Validation outcomes for class declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

# {unresolved attribute name: (member names carrying it)}
AttributeFindings = Mapping[str, tuple[str, ...]]


def freeze_findings(findings: Mapping[str, Iterable[str]]) -> AttributeFindings:
    return MappingProxyType({name: tuple(members) for name, members in findings.items()})


@dataclass(frozen=True)
class NotFoundEntry:
    """A sole-class file whose fully-qualified name does not resolve."""

    fqcn: str
    source_path: str


@dataclass(frozen=True)
class CleanType:
    """A resolved class with no unresolved attributes."""

    fqcn: str
    source_path: str


@dataclass(frozen=True)
class AnomalousType:
    """A resolved class carrying at least one unresolved attribute.

    Findings may be passed as plain dicts and lists; they are stored as
    read-only mappings of tuples. Empty scopes are left empty and are
    omitted on serialization.
    """

    fqcn: str
    source_path: str
    class_attributes: tuple[str, ...] = ()
    property_attributes: AttributeFindings = field(default_factory=dict)
    method_attributes: AttributeFindings = field(default_factory=dict)
    parameter_attributes: Mapping[str, AttributeFindings] = field(default_factory=dict)
    class_constant_attributes: AttributeFindings = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "class_attributes", tuple(self.class_attributes))
        for scope in ("property_attributes", "method_attributes", "class_constant_attributes"):
            object.__setattr__(self, scope, freeze_findings(getattr(self, scope)))
        object.__setattr__(
            self,
            "parameter_attributes",
            MappingProxyType(
                {method: freeze_findings(f) for method, f in self.parameter_attributes.items()}
            ),
        )

    def unresolved_names(self) -> set[str]:
        """Every distinct unresolved attribute name across all scopes."""
        names = set(self.class_attributes)
        names.update(self.property_attributes)
        names.update(self.method_attributes)
        names.update(self.class_constant_attributes)
        for per_method in self.parameter_attributes.values():
            names.update(per_method)
        return names


ValidationOutcome = NotFoundEntry | CleanType | AnomalousType
