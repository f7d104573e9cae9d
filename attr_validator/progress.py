"""Phase tracking for an analysis run: discover -> scan -> validate."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

import structlog

log = structlog.get_logger("attr_validator.progress")

PHASES = ("discover", "scan", "validate")


@dataclass
class PhaseProgress:
    phase: str
    status: str = "pending"  # "pending" | "running" | "completed" | "failed"
    start_time: float | None = None
    end_time: float | None = None
    items: int = 0
    detail: str = ""
    error: str | None = None

    @property
    def duration(self) -> float | None:
        if self.start_time is not None and self.end_time is not None:
            return round(self.end_time - self.start_time, 3)
        return None


class ProgressTracker:
    """Record status, item counts and timing of each phase."""

    def __init__(self) -> None:
        self.phases: dict[str, PhaseProgress] = {name: PhaseProgress(name) for name in PHASES}
        self.callbacks: list[Callable[[PhaseProgress], None]] = []

    def start_phase(self, phase: str) -> None:
        p = self.phases.setdefault(phase, PhaseProgress(phase))
        p.status = "running"
        p.start_time = time.monotonic()
        self._notify(p)

    def advance(self, phase: str, count: int = 1) -> None:
        self.phases[phase].items += count

    def complete_phase(self, phase: str, detail: str = "") -> None:
        p = self.phases[phase]
        p.status = "completed"
        p.end_time = time.monotonic()
        p.detail = detail
        self._notify(p)

    def fail_phase(self, phase: str, error: str) -> None:
        p = self.phases[phase]
        p.status = "failed"
        p.end_time = time.monotonic()
        p.error = error
        self._notify(p)

    def get_summary(self) -> dict[str, Any]:
        total_duration = sum(p.duration or 0 for p in self.phases.values())
        return {
            "phases": [
                {
                    "phase": p.phase,
                    "status": p.status,
                    "items": p.items,
                    "duration": p.duration,
                    "detail": p.detail,
                    "error": p.error,
                }
                for p in self.phases.values()
            ],
            "total_duration": round(total_duration, 3),
        }

    def _notify(self, p: PhaseProgress) -> None:
        log.debug("progress.phase", phase=p.phase, status=p.status, items=p.items)
        for cb in self.callbacks:
            cb(p)
