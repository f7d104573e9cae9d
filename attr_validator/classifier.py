"""Suspicion classifier: enforce one top-level declaration per file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from attr_validator.models.declaration import (
    DeclarationKind,
    DeclarationRecord,
    SideRegistryEntry,
)


class Disposition(Enum):
    SUSPECT = "suspect"
    SIDE = "side"  # sole trait / interface / abstract class
    CANDIDATE = "candidate"  # sole class, to be validated


@dataclass(frozen=True)
class Classification:
    disposition: Disposition
    record: DeclarationRecord
    kind: DeclarationKind | None = None
    side_entry: SideRegistryEntry | None = None
    class_name: str | None = None

    @property
    def namespace(self) -> str | None:
        return self.record.namespace


def is_suspect(record: DeclarationRecord) -> bool:
    return record.total != 1


def classify(record: DeclarationRecord) -> Classification:
    """Route a record to the suspect bucket, a side registry or validation."""
    sole = record.sole_declaration()
    if sole is None:
        return Classification(Disposition.SUSPECT, record)

    kind, name = sole
    if kind is DeclarationKind.CLASS:
        return Classification(Disposition.CANDIDATE, record, kind=kind, class_name=name)

    entry = SideRegistryEntry(
        namespace=record.namespace,
        source_path=record.source_path,
        names=(name,),
    )
    return Classification(Disposition.SIDE, record, kind=kind, side_entry=entry)
