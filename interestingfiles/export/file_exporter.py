"""File exporter — copy a single file entity to disk and record it."""

from __future__ import annotations

import logging
from pathlib import Path

from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.export.manifest import Manifest
from interestingfiles.export.naming import child_path, unique_file_name
from interestingfiles.models.entities import FileEntity
from interestingfiles.stores.base import EntityStore

logger = logging.getLogger(__name__)


def _copy_to(store: EntityStore, entity: FileEntity, target: Path, manifest: Manifest) -> Path:
    try:
        store.copy_content(entity, target)
    except OSError as exc:
        raise ExportError(
            ExportErrorKind.FILE_COPY_FAILED,
            f"failed to copy '{entity.path}' to '{target}': {exc}",
            entity.id,
        ) from exc
    manifest.add_entity(entity, target)
    logger.debug("Saved file %d -> %s", entity.id, target)
    return target


def export_file(
    store: EntityStore,
    entity: FileEntity,
    destination_dir: Path,
    manifest: Manifest,
) -> Path:
    """Export a flagged file as ``<stem>_<id><ext>`` inside ``destination_dir``.

    The id suffix keeps two different files with the same name apart when
    both land in one rule-set folder.

    Returns:
        Path the content was written to.

    Raises:
        ExportError: FILE_COPY_FAILED if the content cannot be copied.
    """
    name = unique_file_name(entity.name, entity.id)
    target = child_path(Path(destination_dir), name, ExportErrorKind.FILE_COPY_FAILED, entity.id)
    return _copy_to(store, entity, target, manifest)


def copy_file_into(
    store: EntityStore,
    entity: FileEntity,
    destination_dir: Path,
    manifest: Manifest,
) -> Path:
    """Copy a file under its plain name; used for files nested in an exported directory."""
    target = child_path(Path(destination_dir), entity.name, ExportErrorKind.FILE_COPY_FAILED, entity.id)
    return _copy_to(store, entity, target, manifest)
