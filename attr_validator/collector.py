"""Annotation collector: keep only attributes whose definition does not resolve."""

from __future__ import annotations

from typing import Iterable

import structlog

from attr_validator.exceptions import RegistryError
from attr_validator.registry.base import TypeRegistry

log = structlog.get_logger("attr_validator.collector")


class AnnotationCollector:
    """Filter attribute references down to the unresolved ones.

    Lookups are memoised for the collector's lifetime; the registry is
    read-only for the whole run.
    """

    def __init__(self, registry: TypeRegistry) -> None:
        self._registry = registry
        self._resolved: dict[str, bool] = {}

    def resolves(self, name: str) -> bool:
        if name not in self._resolved:
            try:
                self._resolved[name] = self._registry.annotation_definition_exists(name)
            except RegistryError as e:
                log.warning("collect.registry_error", attribute=name, error=str(e))
                self._resolved[name] = False
        return self._resolved[name]

    def unresolved_names(self, names: Iterable[str]) -> list[str]:
        """Type-level scope: unresolved names in reference order."""
        return [name for name in names if not self.resolves(name)]

    def unresolved(self, refs: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
        """Group (attribute name, owner) references by unresolved attribute name."""
        findings: dict[str, list[str]] = {}
        for name, owner in refs:
            if not self.resolves(name):
                findings.setdefault(name, []).append(owner)
        return findings
