"""Interesting Files Export data models package.

All engine inputs and outputs are defined here as typed dataclasses.
"""

from interestingfiles.models.entities import (
    EntityKind,
    FileEntity,
    Hit,
    HitAttribute,
    HitRecord,
)
from interestingfiles.models.export import (
    ExportOutcome,
    ExportResult,
    HitFailure,
    ManifestEntry,
    RuleSetDescriptor,
    SetExportResult,
)
from interestingfiles.models.pipeline import ExportContext, PhaseRecord

__all__ = [
    # entities
    "EntityKind",
    "FileEntity",
    "Hit",
    "HitAttribute",
    "HitRecord",
    # export
    "ExportOutcome",
    "ExportResult",
    "HitFailure",
    "ManifestEntry",
    "RuleSetDescriptor",
    "SetExportResult",
    # run
    "ExportContext",
    "PhaseRecord",
]
