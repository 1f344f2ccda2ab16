"""Error types raised by the export engine."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ExportErrorKind(str, Enum):
    """Failure categories surfaced by the export engine."""

    DIRECTORY_CREATE_FAILED = "DirectoryCreateFailed"
    FILE_COPY_FAILED = "FileCopyFailed"
    MANIFEST_WRITE_FAILED = "ManifestWriteFailed"
    MALFORMED_HIT_RECORD = "MalformedHitRecord"
    CORRUPT_HIERARCHY = "CorruptHierarchy"
    ENTITY_NOT_FOUND = "EntityNotFound"
    UNEXPECTED = "UnexpectedError"


class ExportError(Exception):
    """Raised when an export step fails.

    Args:
        kind: Failure category.
        message: Human-readable description including the offending path.
        entity_id: Identifier of the entity being exported, when known.

    Attributes:
        result: The partial ExportResult of a run stopped by this error, set by
            the orchestrator before re-raising; None otherwise.
    """

    def __init__(
        self,
        kind: ExportErrorKind,
        message: str,
        entity_id: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.entity_id = entity_id
        self.result = None

    def __str__(self) -> str:
        if self.entity_id is None:
            return f"{self.kind.value}: {self.message}"
        return f"{self.kind.value} (entity {self.entity_id}): {self.message}"
