#!/usr/bin/env python3
"""Interesting Files Export CLI — save the flagged items of a case.

Usage:
    python scripts/run_export.py --case case.yaml --output-root exports/
    python scripts/run_export.py --case case.json --output-dir /cases/42/out
    python scripts/run_export.py --case case.yaml --max-workers 4 --verify

Exit status is 0 when every hit exported and 1 otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path for consistent import resolution
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config.defaults import (  # noqa: E402
    DEFAULT_LOG_LEVEL,
    MAX_DIRECTORY_DEPTH,
    MAX_WORKERS,
    OUTPUT_DIR,
)
from config.settings import ExportConfig  # noqa: E402


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argparse argument parser for the export CLI."""
    parser = argparse.ArgumentParser(
        prog="run_export",
        description="Save files and directories flagged as interesting, grouped by rule-set",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # ── Input ───────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--case",
        type=str,
        required=True,
        help="Case description file (.yaml, .yml or .json) listing entities and hits",
    )

    # ── Destination ─────────────────────────────────────────────────────────────
    parser.add_argument(
        "--output-root",
        type=str,
        default="",
        help="Export destination; empty means <output-dir>/InterestingFiles",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=OUTPUT_DIR,
        help="Host output directory substituted for the #OUT_DIR# macro",
    )

    # ── Engine limits ───────────────────────────────────────────────────────────
    parser.add_argument(
        "--max-workers",
        type=int,
        default=MAX_WORKERS,
        help="Rule-sets exported in parallel (1 = sequential)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DIRECTORY_DEPTH,
        help="Deepest directory nesting followed below a flagged directory",
    )

    # ── Output and logging ──────────────────────────────────────────────────────
    parser.add_argument(
        "--verify",
        action="store_true",
        default=False,
        help="Re-read every written manifest and check each saved path exists",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity level",
    )
    parser.add_argument(
        "--log-config",
        type=str,
        default=None,
        help="Path to a logging YAML file (defaults to config/logging.yaml)",
    )

    return parser


def args_to_config(args: argparse.Namespace) -> ExportConfig:
    """Convert parsed CLI arguments to an ExportConfig instance."""
    return ExportConfig(
        output_root=args.output_root,
        output_dir=args.output_dir,
        max_workers=args.max_workers,
        max_directory_depth=args.max_depth,
        log_level=args.log_level,
        log_config=args.log_config,
    )


def verify_manifests(result) -> int:
    """Count problems in the written manifests.

    Each saved path missing on disk counts once, and so does a manifest that
    cannot be read or parsed.
    """
    from xml.etree.ElementTree import ParseError

    from interestingfiles.export.manifest import load_manifest

    logger = logging.getLogger("interestingfiles.run_export")
    problems = 0
    for set_result in result.sets:
        if not set_result.manifest_path:
            continue
        try:
            manifest = load_manifest(set_result.manifest_path)
        except (ParseError, ValueError, OSError) as exc:
            logger.error("[%s] manifest %s is unreadable: %s", set_result.name, set_result.manifest_path, exc)
            problems += 1
            continue
        for entry in manifest.entries:
            if not Path(entry.saved_path).exists():
                logger.error("[%s] manifest lists missing path %s", set_result.name, entry.saved_path)
                problems += 1
    return problems


def main() -> None:
    """CLI entrypoint: load the case and run the export."""
    parser = build_arg_parser()
    args = parser.parse_args()

    try:
        config = args_to_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    from interestingfiles.models.export import ExportOutcome
    from interestingfiles.pipeline import outcome_of, run
    from interestingfiles.stores.case_file import CaseFileError, CaseFileStore
    from interestingfiles.utils.logging_utils import configure_logging, get_logger

    configure_logging(config_path=config.log_config, log_level=config.log_level)
    logger = get_logger("run_export")

    try:
        store = CaseFileStore.from_path(args.case)
    except CaseFileError as exc:
        logger.error("Cannot load case: %s", exc)
        sys.exit(2)

    try:
        context = run(config, store, store)
    except KeyboardInterrupt:
        logger.info("Export interrupted by user")
        sys.exit(1)

    outcome = outcome_of(context)
    result = context.export_result
    if result is not None:
        for set_result in result.sets:
            level = logging.INFO if set_result.ok else logging.WARNING
            logger.log(
                level,
                "%s: %d/%d hits exported, %d manifest entries → %s",
                set_result.name,
                set_result.hits_exported,
                set_result.hits_total,
                set_result.entries_written,
                set_result.manifest_path or "(no manifest)",
            )
        if args.verify and verify_manifests(result):
            outcome = ExportOutcome.PARTIAL_FAILURE

    logger.info("Export outcome: %s", outcome)
    sys.exit(0 if outcome == ExportOutcome.SUCCESS else 1)


if __name__ == "__main__":
    main()
