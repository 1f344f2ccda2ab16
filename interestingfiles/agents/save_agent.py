"""SaveInterestingFilesAgent — save flagged files and directories to an output folder.

Output structure:
  <output root>/
  ├── <rule-set A>/
  │   ├── <rule-set A>.manifest
  │   ├── report_5.txt                 flagged file, id-suffixed
  │   └── Photos_42/                   flagged directory wrapper
  │       └── Photos/
  │           └── ...                  directory contents, plain names
  └── <rule-set B>/
      └── ...

When no output root is supplied the agent uses ``#OUT_DIR#/InterestingFiles``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from config.defaults import MODULE_DESCRIPTION, MODULE_NAME, MODULE_VERSION
from interestingfiles.agents.base import BaseAgent
from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.export.orchestrator import ExportOrchestrator
from interestingfiles.models.export import ExportOutcome, ExportResult
from interestingfiles.models.pipeline import ExportContext

logger = logging.getLogger(__name__)


class SaveInterestingFilesAgent(BaseAgent):
    """Export every hit recorded in the case, grouped by rule-set.

    Per-hit failures are logged and skipped; the run still writes a manifest
    for every rule-set whose folder could be created.
    """

    name = MODULE_NAME
    description = MODULE_DESCRIPTION
    version = MODULE_VERSION

    def __init__(self) -> None:
        self._arguments: Optional[str] = None

    def initialize(self, arguments: Optional[str] = None) -> str:
        """Remember the output root passed by the host; empty means the default."""
        # Reset in case initialize() is called more than once
        self._arguments = None
        if arguments is not None and arguments.strip():
            self._arguments = arguments.strip()
        return ExportOutcome.SUCCESS

    def output_root(self, context: ExportContext) -> Path:
        """Resolve the destination from, in order: context, initialize(), config."""
        if context.output_root is not None:
            return Path(context.output_root)
        return context.config.resolve_output_root(self._arguments)

    def run(self, context: ExportContext) -> ExportResult:
        """Save all interesting files for the case held by ``context``.

        A fatal ExportError (output root or manifest write) is recorded on the
        context and yields a PARTIAL_FAILURE result instead of propagating; the
        sets exported before it are kept in that result.
        """
        output_root = self.output_root(context)
        context.output_root = output_root
        logger.info("%s save operations started → %s", self.name, output_root)

        orchestrator = ExportOrchestrator(
            context.store,
            context.hit_source,
            config=context.config,
            should_stop=context.should_stop,
        )
        try:
            result = orchestrator.export(output_root)
        except ExportError as exc:
            logger.error("%s: %s", self.name, exc)
            context.add_error(str(exc))
            # Sets finished before a manifest failure stay in the report
            result = exc.result or ExportResult(output_root=str(output_root))
            result.mark_failed()

        for failure in result.failures:
            target = f"entity {failure.file_id}" if failure.file_id is not None else "rule-set"
            context.add_warning(f"[{failure.set_name}] {target}: {failure.message}")
        for artifact_id in result.malformed_hits:
            context.add_warning(
                f"{ExportErrorKind.MALFORMED_HIT_RECORD.value}: hit record {artifact_id} has no set name"
            )

        context.export_result = result
        logger.info("%s save operations finished (outcome=%s)", self.name, result.outcome)
        return result
