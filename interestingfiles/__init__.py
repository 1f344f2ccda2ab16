"""Interesting Files Export — save flagged case items grouped by rule-set.

Public API surface:
    - ExportConfig: Runtime configuration
    - ExportOrchestrator: The export engine
    - run / run_export: Host driver entry points
"""

__version__ = "1.0.0"
__author__ = "Interesting Files Export Contributors"

from config.settings import ExportConfig
from interestingfiles.export.orchestrator import ExportOrchestrator
from interestingfiles.models.export import ExportOutcome
from interestingfiles.pipeline import run, run_export

__all__ = [
    "__version__",
    "ExportConfig",
    "ExportOrchestrator",
    "ExportOutcome",
    "run",
    "run_export",
]
