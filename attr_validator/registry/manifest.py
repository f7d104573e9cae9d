"""Registry manifest schema: JSON description of loadable types.

The same shape is produced by the PHP reflection script, so both the static
and the reflection registry validate their input with these models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from attr_validator.registry.base import MemberDescriptor, MethodDescriptor, StructuralDescriptor


class MemberSchema(BaseModel):
    name: str
    attributes: list[str] = Field(default_factory=list)

    def to_descriptor(self) -> MemberDescriptor:
        return MemberDescriptor(name=self.name, attributes=tuple(self.attributes))


class MethodSchema(BaseModel):
    name: str
    attributes: list[str] = Field(default_factory=list)
    parameters: list[MemberSchema] = Field(default_factory=list)

    def to_descriptor(self) -> MethodDescriptor:
        return MethodDescriptor(
            name=self.name,
            attributes=tuple(self.attributes),
            parameters=tuple(p.to_descriptor() for p in self.parameters),
        )


class TypeSchema(BaseModel):
    name: str | None = None
    attributes: list[str] = Field(default_factory=list)
    properties: list[MemberSchema] = Field(default_factory=list)
    methods: list[MethodSchema] = Field(default_factory=list)
    constants: list[MemberSchema] = Field(default_factory=list)

    def to_descriptor(self, fqcn: str) -> StructuralDescriptor:
        return StructuralDescriptor(
            name=self.name or fqcn,
            attributes=tuple(self.attributes),
            properties=tuple(p.to_descriptor() for p in self.properties),
            methods=tuple(m.to_descriptor() for m in self.methods),
            constants=tuple(c.to_descriptor() for c in self.constants),
        )


class ManifestSchema(BaseModel):
    """Top-level manifest: reflected types plus attribute classes known to load."""

    types: dict[str, TypeSchema] = Field(default_factory=dict)
    attributes: list[str] = Field(default_factory=list)


MANIFEST_TEMPLATE = {
    "types": {
        "App\\Entity\\User": {
            "attributes": ["App\\Attribute\\Entity"],
            "properties": [{"name": "email", "attributes": ["App\\Attribute\\Column"]}],
            "methods": [
                {
                    "name": "rename",
                    "attributes": [],
                    "parameters": [{"name": "name", "attributes": ["SensitiveParameter"]}],
                }
            ],
            "constants": [{"name": "TABLE", "attributes": []}],
        },
    },
    "attributes": [
        "App\\Attribute\\Entity",
        "App\\Attribute\\Column",
        "SensitiveParameter",
    ],
}
