"""In-memory case store.

Holds entities, their content, and hit records in dictionaries. Used by the
test suite and by callers that assemble a case programmatically.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

from config.defaults import SET_NAME_ATTRIBUTE
from interestingfiles.models.entities import EntityKind, FileEntity, HitAttribute, HitRecord
from interestingfiles.stores.base import EntityStore, HitSource

logger = logging.getLogger(__name__)


class InMemoryCaseStore(EntityStore, HitSource):
    """Entity store and hit source backed by plain dictionaries."""

    def __init__(self) -> None:
        self._entities: Dict[int, FileEntity] = {}
        self._children: Dict[int, List[int]] = defaultdict(list)
        self._content: Dict[int, bytes] = {}
        self._records: List[HitRecord] = []
        self._next_artifact_id = 1

    # ── Building the case ─────────────────────────────────────────────────────

    def add_entity(self, entity: FileEntity, content: Optional[bytes] = None) -> FileEntity:
        """Register an entity; children are listed in registration order."""
        if entity.id in self._entities:
            raise ValueError(f"Duplicate entity id {entity.id}")
        self._entities[entity.id] = entity
        if entity.parent_id is not None:
            self._children[entity.parent_id].append(entity.id)
        if content is not None:
            self._content[entity.id] = content
        return entity

    def add_file(
        self,
        entity_id: int,
        name: str,
        parent_id: Optional[int] = None,
        content: bytes = b"",
        md5: Optional[str] = None,
        path: Optional[str] = None,
    ) -> FileEntity:
        entity = FileEntity(
            id=entity_id,
            name=name,
            kind=EntityKind.FILE,
            parent_id=parent_id,
            path=path if path is not None else self._logical_path(parent_id, name),
            md5=md5,
        )
        return self.add_entity(entity, content)

    def add_directory(
        self,
        entity_id: int,
        name: str,
        parent_id: Optional[int] = None,
        path: Optional[str] = None,
    ) -> FileEntity:
        entity = FileEntity(
            id=entity_id,
            name=name,
            kind=EntityKind.DIRECTORY,
            parent_id=parent_id,
            path=path if path is not None else self._logical_path(parent_id, name),
        )
        return self.add_entity(entity)

    def add_record(self, record: HitRecord) -> HitRecord:
        self._records.append(record)
        self._next_artifact_id = max(self._next_artifact_id, record.artifact_id + 1)
        return record

    def flag(self, entity_id: int, set_name: str, description: str = "") -> HitRecord:
        """Record a hit for ``entity_id`` under ``set_name``."""
        record = HitRecord(
            artifact_id=self._next_artifact_id,
            object_id=entity_id,
            attributes=[HitAttribute(type=SET_NAME_ATTRIBUTE, value=set_name, context=description)],
        )
        return self.add_record(record)

    def _logical_path(self, parent_id: Optional[int], name: str) -> str:
        if parent_id is None or parent_id not in self._entities:
            return f"/{name}"
        return f"{self._entities[parent_id].path.rstrip('/')}/{name}"

    # ── EntityStore ───────────────────────────────────────────────────────────

    def get_entity(self, entity_id: int) -> FileEntity:
        return self._entities[entity_id]

    def list_children(self, parent_id: int) -> List[FileEntity]:
        return [self._entities[i] for i in self._children.get(parent_id, [])]

    def copy_content(self, entity: FileEntity, destination: Path) -> None:
        data = self._content.get(entity.id, b"")
        with open(destination, "wb") as f:
            f.write(data)

    # ── HitSource ─────────────────────────────────────────────────────────────

    def get_hit_records(self) -> List[HitRecord]:
        return list(self._records)
