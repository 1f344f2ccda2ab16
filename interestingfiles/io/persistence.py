"""Persistence utilities for Interesting Files Export.

Provides atomic text writes (write-to-temp-then-rename), safe JSON loading,
and directory creation. No business logic, file I/O only.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


def write_text_atomic(text: str, path: str | Path, encoding: str = "utf-8") -> None:
    """Atomically write a string to a file.

    Writes to a temp file in the destination directory and renames it over the
    target, so a reader never sees a half-written file. Parent directories are
    created if they do not exist. The temp file is removed if either step fails.

    Args:
        text: Content to write.
        path: Output file path.
        encoding: Text encoding (default: utf-8).

    Raises:
        OSError: If the directory cannot be created or the file cannot be written.
        UnicodeEncodeError: If the text cannot be encoded with ``encoding``.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        newline="\n",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
    )
    tmp_path = tmp.name
    try:
        with tmp:
            tmp.write(text)
        os.replace(tmp_path, path)
    except (OSError, ValueError) as exc:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        logger.error("Atomic write failed for %s: %s", path, exc)
        raise

    logger.debug("Wrote %s (%d chars)", path, len(text))


def load_json(path: str | Path) -> Optional[Any]:
    """Load and parse a JSON file.

    Returns None if the file does not exist or cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("JSON file not found: %s", path)
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to load JSON from %s: %s", path, exc)
        return None


def ensure_directory(path: str | Path) -> Path:
    """Create a directory and any missing parents; existing directories are fine.

    Raises:
        OSError: If the path exists as a file or cannot be created.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
