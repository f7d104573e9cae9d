"""Analysis driver: discover -> scan -> classify -> validate -> report."""

from __future__ import annotations

from pathlib import Path

import structlog

from attr_validator.classifier import Disposition, classify
from attr_validator.config import ON_PARSE_ERROR_SUSPECT, AnalyzerSettings
from attr_validator.discovery import discover_sources
from attr_validator.exceptions import ScanError
from attr_validator.models.declaration import DeclarationRecord
from attr_validator.progress import ProgressTracker
from attr_validator.registry.base import TypeRegistry
from attr_validator.report import Report, ReportBuilder
from attr_validator.scanner import DeclarationScanner
from attr_validator.validator import ValidationAggregator

log = structlog.get_logger("attr_validator.analyzer")


class AttributeAnalyzer:
    """
    One analysis run over a file or directory:

        Phase 1: discover  - enumerate .php files (sorted)
        Phase 2: scan      - one DeclarationRecord per file
        Phase 3: validate  - classify records, resolve candidate classes

    Per-file results are folded into a single :class:`ReportBuilder`; the
    returned :class:`Report` is immutable.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        settings: AnalyzerSettings | None = None,
        scanner: DeclarationScanner | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or AnalyzerSettings()
        self.scanner = scanner or DeclarationScanner()
        self.progress = ProgressTracker()

    def analyze(self, root_path: str | Path) -> Report:
        log.info("analyze.start", root=str(root_path))

        # Phase 1: discover. InvalidPathError surfaces before any scanning
        self.progress.start_phase("discover")
        try:
            sources = discover_sources(root_path, self.settings.exclude_dirs)
        except Exception as e:
            self.progress.fail_phase("discover", str(e))
            raise
        self.progress.advance("discover", len(sources))
        self.progress.complete_phase("discover", f"{len(sources)} files")

        # Phase 2: scan
        self.progress.start_phase("scan")
        records: list[DeclarationRecord] = []
        try:
            for path in sources:
                records.append(self._scan(path))
                self.progress.advance("scan")
        except ScanError as e:
            self.progress.fail_phase("scan", str(e))
            raise
        self.progress.complete_phase("scan", f"{len(records)} records")

        # Phase 3: validate
        self.progress.start_phase("validate")
        builder = ReportBuilder(str(root_path))
        aggregator = ValidationAggregator(self.registry)
        for record in records:
            self._fold(record, builder, aggregator)
            self.progress.advance("validate")
        report = builder.build()
        self.progress.complete_phase(
            "validate",
            f"{len(report.anomalous)} anomalous, {len(report.suspects)} suspect, "
            f"{len(report.not_found)} not found",
        )

        log.info(
            "analyze.done",
            root=str(root_path),
            files=len(sources),
            anomalous=len(report.anomalous),
            suspect=len(report.suspects),
            not_found=len(report.not_found),
            clean=len(report.clean),
        )
        return report

    def _scan(self, path: Path) -> DeclarationRecord:
        try:
            return self.scanner.scan_file(path)
        except ScanError as e:
            if self.settings.on_parse_error != ON_PARSE_ERROR_SUSPECT:
                log.error("scan.failed", path=str(path), error=str(e))
                raise
            log.warning("scan.failed_as_suspect", path=str(path), error=str(e))
            record = e.record or DeclarationRecord(source_path=str(path))
            record.error = str(e)
            return record

    def _fold(
        self,
        record: DeclarationRecord,
        builder: ReportBuilder,
        aggregator: ValidationAggregator,
    ) -> None:
        # A file that failed to scan is always suspect, whatever it captured
        if record.error is not None:
            builder.add_suspect(record)
            return

        result = classify(record)
        if result.disposition is Disposition.SUSPECT:
            log.info("scan.suspect", path=record.source_path, total=record.total)
            builder.add_suspect(record)
        elif result.disposition is Disposition.SIDE:
            builder.add_side_entry(result.kind, result.side_entry)
        else:
            outcome = aggregator.validate(result.namespace, result.class_name, record.source_path)
            builder.add_outcome(outcome)


def analyze(
    root_path: str | Path,
    registry: TypeRegistry,
    settings: AnalyzerSettings | None = None,
) -> Report:
    """Analyze ``root_path`` against ``registry`` and return the report."""
    return AttributeAnalyzer(registry, settings).analyze(root_path)
