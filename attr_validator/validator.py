"""Validation aggregator: resolve a class and collect its ghost attributes."""

from __future__ import annotations

from typing import Iterable

import structlog

from attr_validator.collector import AnnotationCollector
from attr_validator.exceptions import RegistryError
from attr_validator.models.findings import (
    AnomalousType,
    CleanType,
    NotFoundEntry,
    ValidationOutcome,
)
from attr_validator.registry.base import (
    NAMESPACE_SEPARATOR,
    MemberDescriptor,
    MethodDescriptor,
    StructuralDescriptor,
    TypeRegistry,
)

log = structlog.get_logger("attr_validator.validator")


def qualify(namespace: str | None, class_name: str) -> str:
    if namespace:
        return f"{namespace}{NAMESPACE_SEPARATOR}{class_name}"
    return class_name


def _member_refs(members: Iterable[MemberDescriptor | MethodDescriptor]) -> list[tuple[str, str]]:
    return [(attribute, member.name) for member in members for attribute in member.attributes]


class ValidationAggregator:
    """
    Walk the five attribute scopes of a resolved class:

        class -> properties -> methods -> parameters (per method) -> constants

    Only non-empty scopes end up on the :class:`AnomalousType`.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        collector: AnnotationCollector | None = None,
    ) -> None:
        self._registry = registry
        self._collector = collector or AnnotationCollector(registry)

    def validate(
        self,
        namespace: str | None,
        class_name: str,
        source_path: str,
    ) -> ValidationOutcome:
        fqcn = qualify(namespace, class_name)

        try:
            descriptor = self._registry.resolve(fqcn)
        except RegistryError as e:
            # A class that fails to load is reported like one that does not exist
            log.warning("validate.registry_error", fqcn=fqcn, path=source_path, error=str(e))
            return NotFoundEntry(fqcn=fqcn, source_path=source_path)

        if descriptor is None:
            log.debug("validate.not_found", fqcn=fqcn, path=source_path)
            return NotFoundEntry(fqcn=fqcn, source_path=source_path)

        return self.inspect(fqcn, source_path, descriptor)

    def inspect(
        self,
        fqcn: str,
        source_path: str,
        descriptor: StructuralDescriptor,
    ) -> CleanType | AnomalousType:
        collector = self._collector

        class_attributes = collector.unresolved_names(descriptor.attributes)
        property_attributes = collector.unresolved(_member_refs(descriptor.properties))
        method_attributes = collector.unresolved(_member_refs(descriptor.methods))

        parameter_attributes: dict[str, dict[str, list[str]]] = {}
        for method in descriptor.methods:
            found = collector.unresolved(_member_refs(method.parameters))
            if found:
                parameter_attributes[method.name] = found

        constant_attributes = collector.unresolved(_member_refs(descriptor.constants))

        if not (
            class_attributes
            or property_attributes
            or method_attributes
            or parameter_attributes
            or constant_attributes
        ):
            return CleanType(fqcn=fqcn, source_path=source_path)

        log.info("validate.undeclared_attributes", fqcn=fqcn, path=source_path)
        return AnomalousType(
            fqcn=fqcn,
            source_path=source_path,
            class_attributes=class_attributes,
            property_attributes=property_attributes,
            method_attributes=method_attributes,
            parameter_attributes=parameter_attributes,
            class_constant_attributes=constant_attributes,
        )
