"""Abstract interfaces for the case store and the annotation (hit) source.

The export engine depends only on these two interfaces. Implementations must
allow concurrent calls for distinct entity ids when rule-sets are exported in
parallel; a read-only store satisfies that trivially.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from interestingfiles.models.entities import FileEntity, HitRecord


class EntityStore(ABC):
    """Read access to the file entities of a case."""

    @abstractmethod
    def get_entity(self, entity_id: int) -> FileEntity:
        """Return full metadata for an entity.

        Raises:
            KeyError: If no entity has this id.
        """

    @abstractmethod
    def list_children(self, parent_id: int) -> List[FileEntity]:
        """Return the direct children of an entity in store order."""

    @abstractmethod
    def copy_content(self, entity: FileEntity, destination: Path) -> None:
        """Write the raw content of a file entity to ``destination``.

        Raises:
            OSError: If the content cannot be read or the destination written.
        """


class HitSource(ABC):
    """Read access to the annotation records flagging interesting items."""

    @abstractmethod
    def get_hit_records(self) -> List[HitRecord]:
        """Return all current hit records."""
