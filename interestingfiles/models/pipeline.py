"""Run orchestration data models for Interesting Files Export.

Defines ExportContext (state shared between the host driver and the agent)
and PhaseRecord (per-phase timing log).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional

from config.settings import ExportConfig

if TYPE_CHECKING:
    from interestingfiles.models.export import ExportResult
    from interestingfiles.stores.base import EntityStore, HitSource


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PhaseRecord:
    """Timing and status record for a single run phase."""

    phase_name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    status: str = "Success"

    @property
    def elapsed_seconds(self) -> float:
        """Compute elapsed time in seconds."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()


@dataclass
class ExportContext:
    """State threaded from the host driver into the export agent.

    The agent reads the store, hit source, and config from here and writes
    its ExportResult back to ``export_result``.
    """

    config: ExportConfig
    store: "EntityStore"
    hit_source: "HitSource"
    output_root: Optional[Path] = None

    # Polled before each hit; returning True stops the run cooperatively
    should_stop: Optional[Callable[[], bool]] = None

    export_result: Optional["ExportResult"] = None

    # ── Run metadata ──────────────────────────────────────────────────────────
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    phase_log: List[PhaseRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def log_phase_start(self, phase_name: str) -> PhaseRecord:
        """Record the start of a run phase."""
        record = PhaseRecord(phase_name=phase_name, start_time=_utcnow())
        self.phase_log.append(record)
        return record

    def log_phase_end(self, record: PhaseRecord, status: str) -> None:
        """Record the end of a run phase."""
        record.end_time = _utcnow()
        record.status = status

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def add_error(self, error: str) -> None:
        self.errors.append(error)
