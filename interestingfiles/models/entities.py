"""Case corpus data models for Interesting Files Export.

Defines the file entities read from the case store and the annotation records
that flag them under a named rule-set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from config.defaults import SET_NAME_ATTRIBUTE


class EntityKind(str, Enum):
    """Kind of a case entity."""

    FILE = "File"
    DIRECTORY = "Directory"


@dataclass(frozen=True)
class FileEntity:
    """A file or directory record in the case's file corpus.

    Children are never held on the entity; they are fetched from the store
    by parent id when a directory is exported.
    """

    id: int
    name: str
    kind: EntityKind = EntityKind.FILE
    parent_id: Optional[int] = None
    path: str = ""        # original logical path inside the case
    md5: Optional[str] = None   # None until a hashing step has run upstream

    @property
    def is_directory(self) -> bool:
        return self.kind == EntityKind.DIRECTORY


@dataclass(frozen=True)
class HitAttribute:
    """One typed attribute of an annotation record."""

    type: str
    value: str = ""
    context: str = ""


@dataclass
class HitRecord:
    """Raw annotation record flagging one entity as interesting."""

    artifact_id: int
    object_id: int
    attributes: List[HitAttribute] = field(default_factory=list)

    def set_name_attributes(self) -> List[HitAttribute]:
        """Return every attribute carrying a rule-set name, in record order."""
        return [a for a in self.attributes if a.type == SET_NAME_ATTRIBUTE]

    def set_name(self) -> Optional[str]:
        """Return the first rule-set name on the record, or None if absent."""
        attrs = self.set_name_attributes()
        return attrs[0].value if attrs else None


@dataclass(frozen=True)
class Hit:
    """A (rule-set, entity) pair derived from an annotation record."""

    rule_set_name: str
    file_id: int
    artifact_id: Optional[int] = None
