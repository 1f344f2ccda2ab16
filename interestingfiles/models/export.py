"""Export data models for Interesting Files Export.

Defines the manifest entry, rule-set descriptor, and run result schemas
produced by the export engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.models.entities import EntityKind


class ExportOutcome:
    """Aggregate status of an export run."""

    SUCCESS = "Success"
    PARTIAL_FAILURE = "PartialFailure"


@dataclass(frozen=True)
class RuleSetDescriptor:
    """Name and description of a rule-set; one per name."""

    name: str
    description: str = ""


@dataclass(frozen=True)
class ManifestEntry:
    """One exported file or directory as recorded in a manifest."""

    kind: EntityKind
    saved_path: str
    original_path: str
    md5: Optional[str] = None   # files only


@dataclass
class HitFailure:
    """A hit (or whole rule-set, when file_id is None) that failed to export."""

    set_name: str
    file_id: Optional[int]
    kind: ExportErrorKind
    message: str


@dataclass
class SetExportResult:
    """Outcome of exporting a single rule-set."""

    name: str
    description: str = ""
    folder: str = ""
    manifest_path: Optional[str] = None
    hits_total: int = 0
    hits_exported: int = 0
    entries_written: int = 0
    failures: List[HitFailure] = field(default_factory=list)
    interrupted: bool = False
    # Manifest write failure; ends the run after this set
    fatal: Optional[ExportError] = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return not self.failures and not self.interrupted and self.manifest_path is not None


@dataclass
class ExportResult:
    """Complete output of one export run."""

    output_root: str = ""
    outcome: str = ExportOutcome.SUCCESS
    sets: List[SetExportResult] = field(default_factory=list)
    failures: List[HitFailure] = field(default_factory=list)
    malformed_hits: List[int] = field(default_factory=list)   # artifact ids
    interrupted: bool = False

    def mark_failed(self) -> None:
        self.outcome = ExportOutcome.PARTIAL_FAILURE
