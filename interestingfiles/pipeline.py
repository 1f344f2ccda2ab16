"""Interesting Files Export host driver.

Loads the SaveInterestingFilesAgent, threads an ExportContext through its
initialize/run/finalize lifecycle, records phase timing, and turns SIGTERM
into a cooperative stop that is honoured before the next hit.

Usage:
    from config.settings import ExportConfig
    from interestingfiles.pipeline import run
    from interestingfiles.stores import CaseFileStore

    store = CaseFileStore.from_path("case.yaml")
    context = run(ExportConfig(output_root="exports"), store, store)
    print(context.export_result.outcome)
"""

from __future__ import annotations

import logging
import signal
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from config.settings import ExportConfig
from interestingfiles.agents.save_agent import SaveInterestingFilesAgent
from interestingfiles.models.export import ExportOutcome
from interestingfiles.models.pipeline import ExportContext
from interestingfiles.stores.base import EntityStore, HitSource

logger = logging.getLogger(__name__)


def _install_sigterm_handler(stop_event: threading.Event):
    """Route SIGTERM to ``stop_event``; returns the previous handler or None."""
    if threading.current_thread() is not threading.main_thread():
        return None

    def _handler(signum: int, frame: object) -> None:  # pragma: no cover
        logger.warning(
            "SIGTERM received (signal %d); export will stop before the next hit", signum
        )
        stop_event.set()

    return signal.signal(signal.SIGTERM, _handler)


def run(
    config: ExportConfig,
    store: EntityStore,
    hit_source: HitSource,
    arguments: Optional[str] = None,
    output_root: Optional[str | Path] = None,
    stop_event: Optional[threading.Event] = None,
) -> ExportContext:
    """Execute one export run.

    Args:
        config: Engine configuration.
        store: Case entity store.
        hit_source: Source of annotation records (often the same object as ``store``).
        arguments: Host argument string passed to initialize(); an output root.
        output_root: Explicit destination; overrides ``arguments`` and config.
        stop_event: Set it to stop the run before the next hit. A fresh event
            is created when omitted.

    Returns:
        ExportContext with ``export_result`` populated and the phase log.
    """
    stop_event = stop_event or threading.Event()
    previous_handler = _install_sigterm_handler(stop_event)

    context = ExportContext(
        config=config,
        store=store,
        hit_source=hit_source,
        output_root=Path(output_root) if output_root is not None else None,
        should_stop=stop_event.is_set,
    )
    context.start_time = datetime.now(timezone.utc)
    agent = SaveInterestingFilesAgent()

    try:
        agent.initialize(arguments)
        record = context.log_phase_start(agent.name)
        try:
            result = agent._run_timed(context)
            context.log_phase_end(record, status=result.outcome)
        except Exception as exc:
            context.log_phase_end(record, status=ExportOutcome.PARTIAL_FAILURE)
            logger.exception("Export: %s raised unhandled exception: %s", agent.name, exc)
            context.add_error(f"{agent.name} failed with exception: {exc}")
        agent.finalize()
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)

    _finalise(context)
    return context


def run_export(
    config: ExportConfig,
    store: EntityStore,
    hit_source: HitSource,
    arguments: Optional[str] = None,
) -> str:
    """Run an export and return only its ExportOutcome value."""
    return outcome_of(run(config, store, hit_source, arguments=arguments))


def outcome_of(context: ExportContext) -> str:
    """Aggregate outcome of a finished run; any recorded error is a failure."""
    if context.export_result is None or context.errors:
        return ExportOutcome.PARTIAL_FAILURE
    return context.export_result.outcome


def _finalise(context: ExportContext) -> None:
    """Record run end time and emit a summary log line."""
    context.end_time = datetime.now(timezone.utc)
    elapsed = (context.end_time - context.start_time).total_seconds() if context.start_time else 0.0
    result = context.export_result
    logger.info(
        "Export: run complete in %.1fs | sets=%d | warnings=%d | errors=%d | outcome=%s",
        elapsed,
        len(result.sets) if result else 0,
        len(context.warnings),
        len(context.errors),
        outcome_of(context),
    )
    for err in context.errors:
        logger.error("Export error: %s", err)
