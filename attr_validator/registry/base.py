"""Type registry interface and structural descriptors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

NAMESPACE_SEPARATOR = "\\"


def normalize_name(name: str) -> str:
    """Canonical lookup key: PHP class names are case-insensitive and may be
    written fully qualified with a leading backslash."""
    return name.lstrip(NAMESPACE_SEPARATOR).lower()


@dataclass(frozen=True)
class MemberDescriptor:
    """A property, parameter or class constant and its attribute names."""

    name: str
    attributes: tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodDescriptor:
    name: str
    attributes: tuple[str, ...] = ()
    parameters: tuple[MemberDescriptor, ...] = ()


@dataclass(frozen=True)
class StructuralDescriptor:
    """Reflected structure of a loadable class.

    Member sequences keep reflection order, which is the order findings are
    reported in.
    """

    name: str
    attributes: tuple[str, ...] = ()
    properties: tuple[MemberDescriptor, ...] = ()
    methods: tuple[MethodDescriptor, ...] = ()
    constants: tuple[MemberDescriptor, ...] = ()


class TypeRegistry(ABC):
    """
    Read-only oracle over the loadable types of the analysed code base.
    Shared by a whole analysis run; implementations must not change their
    answers during a run.
    """

    @abstractmethod
    def resolve(self, fqcn: str) -> StructuralDescriptor | None:
        """
        Reflect a class.

        Returns:
            The descriptor, or None when no loadable class has this name.

        Raises:
            RegistryError: the registry failed while loading the class.
        """
        ...

    @abstractmethod
    def annotation_definition_exists(self, name: str) -> bool:
        """Whether an attribute's defining class is loadable."""
        ...

    def close(self) -> None:
        """Release resources held by the registry."""
