"""Report model: immutable result of one analysis run."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import structlog

from attr_validator.models.declaration import (
    DeclarationKind,
    DeclarationRecord,
    FrozenDeclarationRecord,
    SideRegistryEntry,
    SideRegistryItem,
)
from attr_validator.models.findings import (
    AnomalousType,
    CleanType,
    NotFoundEntry,
    ValidationOutcome,
)
from attr_validator.schemas import (
    VALIDATION_KEYS,
    AnomalousTypeSchema,
    DeclarationRecordSchema,
    ReportSnapshot,
    SideRegistryEntrySchema,
)

log = structlog.get_logger("attr_validator.report")

SIDE_KINDS = (DeclarationKind.TRAIT, DeclarationKind.INTERFACE, DeclarationKind.ABSTRACT)


def _flatten(entries: tuple[SideRegistryEntry, ...]) -> list[SideRegistryItem]:
    return [
        SideRegistryItem(namespace=e.namespace, source_path=e.source_path, name=name)
        for e in entries
        for name in e.names
    ]


@dataclass(frozen=True)
class Report:
    """Categories produced by one analysis run, in file visit order."""

    root_path: str
    anomalous: tuple[AnomalousType, ...] = ()
    suspects: tuple[FrozenDeclarationRecord, ...] = ()
    not_found: tuple[NotFoundEntry, ...] = ()
    clean: tuple[CleanType, ...] = ()
    traits: tuple[SideRegistryEntry, ...] = ()
    interfaces: tuple[SideRegistryEntry, ...] = ()
    abstracts: tuple[SideRegistryEntry, ...] = ()

    # ── projections ──

    @property
    def classes_with_undeclared_attributes(self) -> list[AnomalousType]:
        return list(self.anomalous)

    @property
    def classes_without_undeclared_attributes(self) -> dict[str, str]:
        return {c.fqcn: c.source_path for c in self.clean}

    @property
    def suspect_classes(self) -> list[FrozenDeclarationRecord]:
        return list(self.suspects)

    @property
    def not_found_classes(self) -> dict[str, str]:
        return {n.fqcn: n.source_path for n in self.not_found}

    def trait_items(self) -> list[SideRegistryItem]:
        return _flatten(self.traits)

    def interface_items(self) -> list[SideRegistryItem]:
        return _flatten(self.interfaces)

    def abstract_items(self) -> list[SideRegistryItem]:
        return _flatten(self.abstracts)

    @property
    def is_valid(self) -> bool:
        """True when nothing would show up in the validation view."""
        return not (self.anomalous or self.suspects or self.not_found)

    # ── serialization ──

    def snapshot_model(self) -> ReportSnapshot:
        return ReportSnapshot(
            classes_with_undeclared_attributes=[
                AnomalousTypeSchema.from_type(a) for a in self.anomalous
            ],
            classes_without_undeclared_attributes=self.classes_without_undeclared_attributes,
            suspect_classes=[DeclarationRecordSchema.from_record(r) for r in self.suspects],
            not_found_classes=self.not_found_classes,
            trait=[SideRegistryEntrySchema.from_entry(e) for e in self.traits],
            interface=[SideRegistryEntrySchema.from_entry(e) for e in self.interfaces],
            abstract=[SideRegistryEntrySchema.from_entry(e) for e in self.abstracts],
        )

    def to_snapshot(self) -> dict[str, Any]:
        """Full structured snapshot of every category."""
        return self.snapshot_model().model_dump(by_alias=True)

    def validation_view(self) -> dict[str, Any]:
        """Problem categories only; empty categories are left out entirely."""
        snapshot = self.to_snapshot()
        return {key: snapshot[key] for key in VALIDATION_KEYS if snapshot[key]}

    def to_json(self, full: bool = True, indent: int | None = 2) -> str:
        data = self.to_snapshot() if full else self.validation_view()
        return json.dumps(data, indent=indent)


class ReportBuilder:
    """Fold per-file results into a :class:`Report`.

    Clean, anomalous and not-found entries are keyed by fqcn. A later file
    defining the same fqcn replaces the earlier entry, whichever of the three
    categories it was in. Suspect records are frozen on the way in.
    """

    def __init__(self, root_path: str) -> None:
        self._root_path = root_path
        self._anomalous: dict[str, AnomalousType] = {}
        self._clean: dict[str, CleanType] = {}
        self._not_found: dict[str, NotFoundEntry] = {}
        self._suspects: list[FrozenDeclarationRecord] = []
        self._side: dict[DeclarationKind, list[SideRegistryEntry]] = {k: [] for k in SIDE_KINDS}

    def add_suspect(self, record: DeclarationRecord) -> None:
        self._suspects.append(record.freeze())

    def add_side_entry(self, kind: DeclarationKind, entry: SideRegistryEntry) -> None:
        if kind not in self._side:
            raise ValueError(f"{kind.value} declarations have no side registry")
        self._side[kind].append(entry)

    def add_outcome(self, outcome: ValidationOutcome) -> None:
        fqcn = outcome.fqcn
        previous = self._anomalous.get(fqcn) or self._clean.get(fqcn) or self._not_found.get(fqcn)
        if previous is not None:
            log.warning(
                "report.fqcn_redefined",
                fqcn=fqcn,
                previous_path=previous.source_path,
                path=outcome.source_path,
            )

        if isinstance(outcome, NotFoundEntry):
            target: dict[str, Any] = self._not_found
        elif isinstance(outcome, AnomalousType):
            target = self._anomalous
        else:
            target = self._clean
        for category in (self._anomalous, self._clean, self._not_found):
            if category is not target:
                category.pop(fqcn, None)
        target[fqcn] = outcome

    def build(self) -> Report:
        return Report(
            root_path=self._root_path,
            anomalous=tuple(self._anomalous.values()),
            suspects=tuple(self._suspects),
            not_found=tuple(self._not_found.values()),
            clean=tuple(self._clean.values()),
            traits=tuple(self._side[DeclarationKind.TRAIT]),
            interfaces=tuple(self._side[DeclarationKind.INTERFACE]),
            abstracts=tuple(self._side[DeclarationKind.ABSTRACT]),
        )
