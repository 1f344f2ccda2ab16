"""Interesting Files Export — ExportConfig and environment-based configuration loading.

All runtime configuration flows through ExportConfig. No module-level globals:
the output root in particular is carried on the config object, so repeated or
concurrent runs never share a cached path.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from config.defaults import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_SUBFOLDER,
    MANIFEST_SUFFIX,
    MAX_DIRECTORY_DEPTH,
    MAX_WORKERS,
    OUT_DIR_MACRO,
    OUTPUT_DIR,
)

# Load .env file if present; silently skip if missing
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from exc


@dataclass
class ExportConfig:
    """Single configuration object threaded through the export engine.

    ``output_root`` is the destination supplied by the caller. When it is empty
    the engine falls back to ``<output_dir>/<default_subfolder>``, mirroring the
    host's ``#OUT_DIR#`` macro convention.
    """

    # ── Destination ───────────────────────────────────────────────────────────
    output_root: str = field(default_factory=lambda: os.getenv("OUTPUT_ROOT", ""))
    output_dir: str = field(default_factory=lambda: os.getenv("OUT_DIR", OUTPUT_DIR))
    default_subfolder: str = DEFAULT_SUBFOLDER
    manifest_suffix: str = MANIFEST_SUFFIX

    # ── Engine limits ─────────────────────────────────────────────────────────
    max_directory_depth: int = field(
        default_factory=lambda: _env_int("MAX_DIRECTORY_DEPTH", MAX_DIRECTORY_DEPTH)
    )
    max_workers: int = field(default_factory=lambda: _env_int("MAX_WORKERS", MAX_WORKERS))

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))
    log_config: Optional[str] = field(default_factory=lambda: os.getenv("LOG_CONFIG"))

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.max_directory_depth < 1:
            raise ValueError(
                f"max_directory_depth must be at least 1, got {self.max_directory_depth}"
            )
        if not self.manifest_suffix.startswith("."):
            self.manifest_suffix = "." + self.manifest_suffix

    def expand_macros(self, text: str) -> str:
        """Substitute the host's ``#OUT_DIR#`` macro with ``output_dir``."""
        return text.replace(OUT_DIR_MACRO, self.output_dir)

    def resolve_output_root(self, arguments: Optional[str] = None) -> Path:
        """Return the export destination.

        Args:
            arguments: Host-supplied argument string. Takes precedence over
                ``output_root`` when non-empty.

        Returns:
            The explicit root, or ``#OUT_DIR#/<default_subfolder>`` expanded.
        """
        explicit = (arguments or "").strip() or self.output_root.strip()
        if explicit:
            return Path(explicit)
        return Path(self.expand_macros(OUT_DIR_MACRO)) / self.default_subfolder
