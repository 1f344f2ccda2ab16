"""Case store loaded from a YAML or JSON case description.

File format (YAML shown; JSON uses the same keys):

    entities:
      - id: 10
        name: Documents
        kind: Directory
        path: /vol1/Documents
      - id: 11
        name: report.txt
        parent_id: 10
        path: /vol1/Documents/report.txt
        md5: 0cc175b9c0f1b6a831c399e269772661
        source: content/report.txt      # relative to the case file
    hits:
      - artifact_id: 1
        object_id: 11
        set_name: Office documents
        description: Documents found in user folders
      - artifact_id: 2
        object_id: 10
        attributes:
          - {type: SET_NAME, value: Office documents, context: Documents found in user folders}

File content comes from ``source`` (a path on disk) or an inline ``content``
string. A file entity with neither is exported as an empty file.
"""

from __future__ import annotations

import logging
import shutil
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from config.defaults import SET_NAME_ATTRIBUTE
from interestingfiles.io.persistence import load_json
from interestingfiles.models.entities import EntityKind, FileEntity, HitAttribute, HitRecord
from interestingfiles.stores.base import EntityStore, HitSource

logger = logging.getLogger(__name__)


class CaseFileError(ValueError):
    """Raised when a case description cannot be loaded."""


def _parse_kind(raw: Any) -> EntityKind:
    text = str(raw or "File").strip().lower()
    if text in ("directory", "dir", "d"):
        return EntityKind.DIRECTORY
    if text in ("file", "f", "regular"):
        return EntityKind.FILE
    raise CaseFileError(f"Unknown entity kind {raw!r}")


def _parse_hit(raw: Dict[str, Any], index: int) -> HitRecord:
    try:
        object_id = int(raw["object_id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise CaseFileError(f"Hit #{index} has no valid object_id") from exc

    attributes: List[HitAttribute] = []
    for attr in raw.get("attributes") or []:
        attributes.append(
            HitAttribute(
                type=str(attr.get("type", "")),
                value=str(attr.get("value", "")),
                context=str(attr.get("context", "")),
            )
        )
    if raw.get("set_name"):
        attributes.append(
            HitAttribute(
                type=SET_NAME_ATTRIBUTE,
                value=str(raw["set_name"]),
                context=str(raw.get("description", "")),
            )
        )
    return HitRecord(
        artifact_id=int(raw.get("artifact_id", index + 1)),
        object_id=object_id,
        attributes=attributes,
    )


class CaseFileStore(EntityStore, HitSource):
    """Entity store and hit source read from a case description file."""

    def __init__(
        self,
        entities: List[FileEntity],
        records: List[HitRecord],
        sources: Optional[Dict[int, Path]] = None,
        inline: Optional[Dict[int, bytes]] = None,
    ) -> None:
        self._entities: Dict[int, FileEntity] = {}
        self._children: Dict[int, List[int]] = defaultdict(list)
        for entity in entities:
            if entity.id in self._entities:
                raise CaseFileError(f"Duplicate entity id {entity.id}")
            self._entities[entity.id] = entity
            if entity.parent_id is not None:
                self._children[entity.parent_id].append(entity.id)
        self._records = list(records)
        self._sources = dict(sources or {})
        self._inline = dict(inline or {})

    @classmethod
    def from_path(cls, path: str | Path) -> "CaseFileStore":
        """Load a case description from ``.yaml``, ``.yml`` or ``.json``.

        Raises:
            CaseFileError: If the file is missing, unparseable, or malformed.
        """
        path = Path(path)
        if not path.exists():
            raise CaseFileError(f"Case file not found: {path}")

        if path.suffix.lower() in (".yaml", ".yml"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise CaseFileError(f"Invalid YAML in {path}: {exc}") from exc
        else:
            data = load_json(path)

        if not isinstance(data, dict):
            raise CaseFileError(f"Case file {path} must contain a mapping")
        return cls.from_dict(data, base_dir=path.parent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "CaseFileStore":
        base_dir = base_dir or Path.cwd()
        entities: List[FileEntity] = []
        sources: Dict[int, Path] = {}
        inline: Dict[int, bytes] = {}

        for index, raw in enumerate(data.get("entities") or []):
            try:
                entity_id = int(raw["id"])
                name = str(raw["name"])
            except (KeyError, TypeError, ValueError) as exc:
                raise CaseFileError(f"Entity #{index} needs an integer id and a name") from exc
            parent = raw.get("parent_id")
            entities.append(
                FileEntity(
                    id=entity_id,
                    name=name,
                    kind=_parse_kind(raw.get("kind")),
                    parent_id=int(parent) if parent is not None else None,
                    path=str(raw.get("path") or f"/{name}"),
                    md5=str(raw["md5"]) if raw.get("md5") else None,
                )
            )
            if raw.get("source"):
                sources[entity_id] = base_dir / str(raw["source"])
            elif raw.get("content") is not None:
                inline[entity_id] = str(raw["content"]).encode("utf-8")

        records = [_parse_hit(raw, i) for i, raw in enumerate(data.get("hits") or [])]
        logger.info("Loaded case with %d entities and %d hit records", len(entities), len(records))
        return cls(entities, records, sources=sources, inline=inline)

    # ── EntityStore ───────────────────────────────────────────────────────────

    def get_entity(self, entity_id: int) -> FileEntity:
        return self._entities[entity_id]

    def list_children(self, parent_id: int) -> List[FileEntity]:
        return [self._entities[i] for i in self._children.get(parent_id, [])]

    def copy_content(self, entity: FileEntity, destination: Path) -> None:
        source = self._sources.get(entity.id)
        if source is not None:
            shutil.copyfile(source, destination)
            return
        with open(destination, "wb") as f:
            f.write(self._inline.get(entity.id, b""))

    # ── HitSource ─────────────────────────────────────────────────────────────

    def get_hit_records(self) -> List[HitRecord]:
        return list(self._records)
