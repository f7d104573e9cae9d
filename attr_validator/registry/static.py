"""In-memory type registry backed by a fixture map or a JSON manifest."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import structlog
from pydantic import ValidationError

from attr_validator.exceptions import RegistryError
from attr_validator.registry.base import StructuralDescriptor, TypeRegistry, normalize_name
from attr_validator.registry.manifest import ManifestSchema

log = structlog.get_logger("attr_validator.registry")


class StaticTypeRegistry(TypeRegistry):
    """Registry over a fixed set of descriptors.

    An attribute definition exists when it was registered as an attribute or
    is itself a registered type, mirroring ``class_exists()``.
    """

    def __init__(
        self,
        types: Mapping[str, StructuralDescriptor] | None = None,
        attributes: Iterable[str] = (),
    ) -> None:
        self._types: dict[str, StructuralDescriptor] = {}
        self._attributes: set[str] = set()
        for fqcn, descriptor in (types or {}).items():
            self.register(descriptor, fqcn)
        for name in attributes:
            self.register_attribute(name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StaticTypeRegistry:
        try:
            manifest = ManifestSchema.model_validate(data)
        except ValidationError as e:
            raise RegistryError(f"Invalid registry manifest: {e}") from e
        return cls._from_manifest(manifest)

    @classmethod
    def from_manifest(cls, path: str | Path) -> StaticTypeRegistry:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise RegistryError(f"Cannot read registry manifest {path}: {e}") from e
        try:
            manifest = ManifestSchema.model_validate_json(text)
        except ValidationError as e:
            raise RegistryError(f"Invalid registry manifest {path}: {e}") from e
        registry = cls._from_manifest(manifest)
        log.info(
            "registry.manifest_loaded",
            path=str(path),
            types=len(manifest.types),
            attributes=len(manifest.attributes),
        )
        return registry

    @classmethod
    def _from_manifest(cls, manifest: ManifestSchema) -> StaticTypeRegistry:
        types = {fqcn: schema.to_descriptor(fqcn) for fqcn, schema in manifest.types.items()}
        return cls(types, manifest.attributes)

    def register(self, descriptor: StructuralDescriptor, fqcn: str | None = None) -> None:
        self._types[normalize_name(fqcn or descriptor.name)] = descriptor

    def register_attribute(self, name: str) -> None:
        self._attributes.add(normalize_name(name))

    def resolve(self, fqcn: str) -> StructuralDescriptor | None:
        return self._types.get(normalize_name(fqcn))

    def annotation_definition_exists(self, name: str) -> bool:
        key = normalize_name(name)
        return key in self._attributes or key in self._types
