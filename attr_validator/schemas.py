"""Report snapshot schemas (camelCase JSON)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from attr_validator.models.declaration import (
    DeclarationRecord,
    FrozenDeclarationRecord,
    SideRegistryEntry,
)
from attr_validator.models.findings import AnomalousType, AttributeFindings

FindingsDict = dict[str, list[str]]


def _thaw(findings: AttributeFindings) -> FindingsDict:
    return {name: list(members) for name, members in findings.items()}


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DeclarationRecordSchema(_Schema):
    namespace: str | None
    source_path: str = Field(alias="sourcePath")
    declarations: dict[str, list[str]]
    total: int
    error: str | None = None

    @model_serializer(mode="wrap")
    def _drop_missing_error(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if data.get("error") is None:
            data.pop("error", None)
        return data

    @classmethod
    def from_record(
        cls, record: DeclarationRecord | FrozenDeclarationRecord
    ) -> DeclarationRecordSchema:
        return cls(
            namespace=record.namespace,
            source_path=record.source_path,
            declarations={kind.value: list(names) for kind, names in record.declarations.items()},
            total=record.total,
            error=record.error,
        )


class SideRegistryEntrySchema(_Schema):
    namespace: str | None
    source_path: str = Field(alias="sourcePath")
    names: list[str]

    @classmethod
    def from_entry(cls, entry: SideRegistryEntry) -> SideRegistryEntrySchema:
        return cls(namespace=entry.namespace, source_path=entry.source_path, names=list(entry.names))


class AnomalousTypeSchema(_Schema):
    """Only the scopes that carry findings are serialized."""

    fqcn: str
    source_path: str = Field(alias="sourcePath")
    class_attributes: list[str] = Field(default_factory=list, alias="classAttributes")
    property_attributes: FindingsDict = Field(default_factory=dict, alias="propertyAttributes")
    method_attributes: FindingsDict = Field(default_factory=dict, alias="methodAttributes")
    parameter_attributes: dict[str, FindingsDict] = Field(
        default_factory=dict, alias="parameterAttributes"
    )
    class_constant_attributes: FindingsDict = Field(
        default_factory=dict, alias="classConstantAttributes"
    )

    @model_serializer(mode="wrap")
    def _drop_empty_scopes(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if value or isinstance(value, str)}

    @classmethod
    def from_type(cls, anomalous: AnomalousType) -> AnomalousTypeSchema:
        return cls(
            fqcn=anomalous.fqcn,
            source_path=anomalous.source_path,
            class_attributes=list(anomalous.class_attributes),
            property_attributes=_thaw(anomalous.property_attributes),
            method_attributes=_thaw(anomalous.method_attributes),
            parameter_attributes={
                method: _thaw(f) for method, f in anomalous.parameter_attributes.items()
            },
            class_constant_attributes=_thaw(anomalous.class_constant_attributes),
        )


class ReportSnapshot(_Schema):
    classes_with_undeclared_attributes: list[AnomalousTypeSchema] = Field(
        alias="classesWithUndeclaredAttributes"
    )
    classes_without_undeclared_attributes: dict[str, str] = Field(
        alias="classesWithoutUndeclaredAttributes"
    )
    suspect_classes: list[DeclarationRecordSchema] = Field(alias="suspectClasses")
    not_found_classes: dict[str, str] = Field(alias="notFoundClasses")
    trait: list[SideRegistryEntrySchema]
    interface: list[SideRegistryEntrySchema]
    abstract: list[SideRegistryEntrySchema]


# Categories kept by the validation view, in output order
VALIDATION_KEYS = ("classesWithUndeclaredAttributes", "suspectClasses", "notFoundClasses")
