"""Collision-safe naming for exported items."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final, Optional

from interestingfiles.errors import ExportError, ExportErrorKind

WINDOWS_DRIVE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:")


def unique_file_name(name: str, entity_id: int) -> str:
    """Suffix a file name with its entity id, keeping the extension last.

    ``report.txt`` with id 5 becomes ``report_5.txt``; names without a dot,
    or whose only dot is the first character (``.bashrc``), get the suffix
    appended: ``.bashrc_3``.
    """
    suffix = f"_{entity_id}"
    pos = name.rfind(".")
    if pos > 0:
        return name[:pos] + suffix + name[pos:]
    return name + suffix


def wrapper_dir_name(name: str, entity_id: int) -> str:
    """Name of the folder that disambiguates an exported top-level directory."""
    return f"{name}_{entity_id}"


def safe_component(name: str, kind: ExportErrorKind, entity_id: Optional[int] = None) -> str:
    """Return ``name`` if it is usable as a single path component.

    Raises:
        ExportError: If the name is empty, ``.``/``..``, contains a path
            separator or NUL, or looks like a drive letter.
    """
    if (
        not name
        or name in (".", "..")
        or "/" in name
        or "\\" in name
        or "\x00" in name
        or WINDOWS_DRIVE_PATTERN.match(name)
    ):
        raise ExportError(kind, f"unsafe name {name!r} cannot be used as a path component", entity_id)
    return name


def child_path(parent: Path, name: str, kind: ExportErrorKind, entity_id: Optional[int] = None) -> Path:
    """Join a checked single component onto ``parent``."""
    return parent / safe_component(name, kind, entity_id)
