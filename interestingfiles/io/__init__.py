"""Interesting Files Export I/O package.

File read/write operations only; no business logic in this layer.
"""

from interestingfiles.io.persistence import (
    ensure_directory,
    load_json,
    write_text_atomic,
)

__all__ = [
    "ensure_directory",
    "load_json",
    "write_text_atomic",
]
