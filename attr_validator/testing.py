"""Test doubles for attr_validator: use in unit and integration tests.

Usage::

    from attr_validator.testing import FakeTypeRegistry

    registry = FakeTypeRegistry()
    registry.add_class("App\\Bar", properties={"field": ["Missing"]})
    registry.register_attribute("Logged")
"""

from __future__ import annotations

from typing import Iterable, Mapping

from attr_validator.exceptions import RegistryError
from attr_validator.registry.base import (
    MemberDescriptor,
    MethodDescriptor,
    StructuralDescriptor,
    normalize_name,
)
from attr_validator.registry.static import StaticTypeRegistry


class FakeTypeRegistry(StaticTypeRegistry):
    """Static registry that records lookups and can be told to fail.

    Parameters
    ----------
    failing:
        Names (class or attribute) whose lookup raises :class:`RegistryError`,
        as a class that fails to autoload would.
    """

    def __init__(
        self,
        types: Mapping[str, StructuralDescriptor] | None = None,
        attributes: Iterable[str] = (),
        *,
        failing: Iterable[str] = (),
    ) -> None:
        super().__init__(types, attributes)
        self._failing = {normalize_name(n) for n in failing}
        self._calls: list[tuple[str, str]] = []

    @property
    def calls(self) -> list[tuple[str, str]]:
        """``(operation, name)`` pairs received, useful for assertions in tests."""
        return self._calls

    def add_class(
        self,
        fqcn: str,
        attributes: Iterable[str] = (),
        properties: Mapping[str, Iterable[str]] | None = None,
        methods: Mapping[str, Iterable[str]] | None = None,
        parameters: Mapping[str, Mapping[str, Iterable[str]]] | None = None,
        constants: Mapping[str, Iterable[str]] | None = None,
    ) -> StructuralDescriptor:
        """Register a class from plain ``{member: [attribute, ...]}`` maps.

        ``parameters`` is keyed by method name; methods named only there are
        added with no attributes of their own.
        """
        methods = dict(methods or {})
        parameters = parameters or {}
        for method in parameters:
            methods.setdefault(method, ())

        descriptor = StructuralDescriptor(
            name=fqcn,
            attributes=tuple(attributes),
            properties=tuple(
                MemberDescriptor(name, tuple(attrs)) for name, attrs in (properties or {}).items()
            ),
            methods=tuple(
                MethodDescriptor(
                    name,
                    tuple(attrs),
                    tuple(
                        MemberDescriptor(param, tuple(param_attrs))
                        for param, param_attrs in parameters.get(name, {}).items()
                    ),
                )
                for name, attrs in methods.items()
            ),
            constants=tuple(
                MemberDescriptor(name, tuple(attrs)) for name, attrs in (constants or {}).items()
            ),
        )
        self.register(descriptor, fqcn)
        return descriptor

    def resolve(self, fqcn: str) -> StructuralDescriptor | None:
        self._calls.append(("resolve", fqcn))
        self._check(fqcn)
        return super().resolve(fqcn)

    def annotation_definition_exists(self, name: str) -> bool:
        self._calls.append(("annotation_definition_exists", name))
        self._check(name)
        return super().annotation_definition_exists(name)

    def _check(self, name: str) -> None:
        if normalize_name(name) in self._failing:
            raise RegistryError(f"Fake failure for {name}")
