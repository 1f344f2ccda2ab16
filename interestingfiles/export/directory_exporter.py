"""Directory exporter — mirror a directory entity's subtree onto disk.

Layout produced for a flagged directory ``Photos`` with id 42:

    <destination>/
        Photos_42/          wrapper, unique per entity id
            Photos/         clean original name
                <children, recursively, under their plain names>

Children are fetched from the store by parent id one level at a time. Any
failure propagates to the caller, abandoning the rest of this directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Set

from config.defaults import MAX_DIRECTORY_DEPTH
from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.export.file_exporter import copy_file_into
from interestingfiles.export.manifest import Manifest
from interestingfiles.export.naming import child_path, safe_component, wrapper_dir_name
from interestingfiles.io.persistence import ensure_directory
from interestingfiles.models.entities import FileEntity
from interestingfiles.stores.base import EntityStore

logger = logging.getLogger(__name__)


def _make_dir(path: Path, entity_id: int) -> Path:
    try:
        return ensure_directory(path)
    except OSError as exc:
        raise ExportError(
            ExportErrorKind.DIRECTORY_CREATE_FAILED,
            f"failed to create directory '{path}': {exc}",
            entity_id,
        ) from exc


def export_directory(
    store: EntityStore,
    entity: FileEntity,
    destination_parent: Path,
    manifest: Manifest,
    max_depth: int = MAX_DIRECTORY_DEPTH,
) -> Path:
    """Export a flagged directory and everything below it.

    Args:
        store: Case store used to list children and copy content.
        entity: The flagged directory.
        destination_parent: Folder receiving the ``<name>_<id>`` wrapper.
        manifest: Manifest collecting one entry per directory and file.
        max_depth: Deepest nesting level followed below ``entity``.

    Returns:
        The inner directory holding the exported contents.

    Raises:
        ExportError: On directory creation or copy failure, or when the store's
            hierarchy revisits an entity or nests deeper than ``max_depth``.
    """
    name = safe_component(entity.name, ExportErrorKind.DIRECTORY_CREATE_FAILED, entity.id)
    inner = Path(destination_parent) / wrapper_dir_name(name, entity.id) / name
    _make_dir(inner, entity.id)
    manifest.add_entity(entity, inner)

    _save_contents(store, entity, inner, manifest, depth=1, max_depth=max_depth, seen={entity.id})
    return inner


def _save_contents(
    store: EntityStore,
    directory: FileEntity,
    dir_path: Path,
    manifest: Manifest,
    depth: int,
    max_depth: int,
    seen: Optional[Set[int]] = None,
) -> None:
    if depth > max_depth:
        raise ExportError(
            ExportErrorKind.CORRUPT_HIERARCHY,
            f"'{directory.path}' nests deeper than {max_depth} levels",
            directory.id,
        )
    seen = seen if seen is not None else set()

    for child in store.list_children(directory.id):
        if child.id in seen:
            raise ExportError(
                ExportErrorKind.CORRUPT_HIERARCHY,
                f"entity {child.id} appears twice below '{directory.path}'",
                child.id,
            )
        seen.add(child.id)

        if child.is_directory:
            sub_path = child_path(dir_path, child.name, ExportErrorKind.DIRECTORY_CREATE_FAILED, child.id)
            _make_dir(sub_path, child.id)
            # Only the flagged directory itself gets a SavedDirectory entry
            _save_contents(store, child, sub_path, manifest, depth + 1, max_depth, seen)
        else:
            copy_file_into(store, child, dir_path, manifest)
