"""Interesting Files Export configuration package."""

from config.defaults import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_SUBFOLDER,
    MANIFEST_SUFFIX,
    MAX_DIRECTORY_DEPTH,
    MAX_WORKERS,
    OUT_DIR_MACRO,
    OUTPUT_DIR,
)
from config.settings import ExportConfig

__all__ = [
    "ExportConfig",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SUBFOLDER",
    "MANIFEST_SUFFIX",
    "MAX_DIRECTORY_DEPTH",
    "MAX_WORKERS",
    "OUT_DIR_MACRO",
    "OUTPUT_DIR",
]
