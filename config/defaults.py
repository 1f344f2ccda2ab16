"""Interesting Files Export — default values and configuration constants.

All tuneable values live here. Never hard-code magic numbers in source files.
Import constants from this module; override via ExportConfig at runtime.
"""

# ── Output layout ──────────────────────────────────────────────────────────────
# Host "output directory" used to expand the #OUT_DIR# macro
OUTPUT_DIR: str = "outputs"

# Macro the host substitutes with its output directory
OUT_DIR_MACRO: str = "#OUT_DIR#"

# Subfolder of the output directory used when no output root is supplied
DEFAULT_SUBFOLDER: str = "InterestingFiles"

# File suffix of the per rule-set manifest written next to the exported items
MANIFEST_SUFFIX: str = ".manifest"

# ── Directory export guards ────────────────────────────────────────────────────
# Maximum nesting depth followed below an exported directory. A case store that
# encodes a tree never comes close; anything deeper is treated as corrupt.
MAX_DIRECTORY_DEPTH: int = 256

# ── Concurrency ────────────────────────────────────────────────────────────────
# Rule-sets exported in parallel. 1 keeps the sequential reference behavior.
MAX_WORKERS: int = 1

# ── Annotation records ─────────────────────────────────────────────────────────
# Attribute type carrying the rule-set name (its context holds the description)
SET_NAME_ATTRIBUTE: str = "SET_NAME"

# ── Manifest document schema ───────────────────────────────────────────────────
MANIFEST_ROOT_TAG: str = "InterestingFileSet"
MANIFEST_FILE_TAG: str = "SavedFile"
MANIFEST_DIRECTORY_TAG: str = "SavedDirectory"
MANIFEST_PATH_TAG: str = "Path"
MANIFEST_ORIGINAL_PATH_TAG: str = "OriginalPath"
MANIFEST_MD5_TAG: str = "MD5"
MANIFEST_INDENT: str = "  "
MANIFEST_ENCODING: str = "utf-8"

# ── Module identification ──────────────────────────────────────────────────────
MODULE_NAME: str = "SaveInterestingFiles"
MODULE_DESCRIPTION: str = (
    "Saves files and directories that were flagged as being interesting "
    "to a location for further analysis"
)
MODULE_VERSION: str = "0.0.0"

# ── Logging ────────────────────────────────────────────────────────────────────
DEFAULT_LOG_LEVEL: str = "INFO"
