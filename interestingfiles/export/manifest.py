"""Manifest builder — per rule-set record of everything exported.

Entries accumulate in memory in visit order; nothing touches disk until
serialize(). Characters XML 1.0 cannot hold (control characters, lone
surrogates) are written as \\xNN or \\uNNNN text so the document stays
well-formed. The document layout is:

    <InterestingFileSet name="..." description="...">
      <SavedDirectory>
        <Path>...</Path>
        <OriginalPath>...</OriginalPath>
      </SavedDirectory>
      <SavedFile>
        <Path>...</Path>
        <OriginalPath>...</OriginalPath>
        <MD5>...</MD5>
      </SavedFile>
    </InterestingFileSet>
"""

from __future__ import annotations

import logging
import re
import threading
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Union

from config.defaults import (
    MANIFEST_DIRECTORY_TAG,
    MANIFEST_ENCODING,
    MANIFEST_FILE_TAG,
    MANIFEST_INDENT,
    MANIFEST_MD5_TAG,
    MANIFEST_ORIGINAL_PATH_TAG,
    MANIFEST_PATH_TAG,
    MANIFEST_ROOT_TAG,
)
from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.io.persistence import write_text_atomic
from interestingfiles.models.entities import EntityKind, FileEntity
from interestingfiles.models.export import ManifestEntry

logger = logging.getLogger(__name__)

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Code points XML 1.0 cannot carry, lone surrogates from undecodable names included
_ILLEGAL_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _xml_safe(text: str) -> str:
    """Replace characters XML cannot represent with a visible \\xNN or \\uNNNN escape."""

    def _escape(match: "re.Match[str]") -> str:
        code = ord(match.group())
        return f"\\x{code:02x}" if code <= 0xFF else f"\\u{code:04x}"

    return _ILLEGAL_XML_CHARS.sub(_escape, text)


class Manifest:
    """Ordered collection of ManifestEntry records for one rule-set."""

    def __init__(self, set_name: str, set_description: str = "") -> None:
        self.set_name = set_name
        self.set_description = set_description
        self._entries: List[ManifestEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[ManifestEntry]:
        with self._lock:
            return list(self._entries)

    def add_entry(self, entry: ManifestEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def add_entity(self, entity: FileEntity, saved_path: Union[str, Path]) -> ManifestEntry:
        """Record an exported entity at ``saved_path``; files carry their hash."""
        entry = ManifestEntry(
            kind=entity.kind,
            saved_path=str(saved_path),
            original_path=entity.path,
            md5=None if entity.is_directory else (entity.md5 or ""),
        )
        self.add_entry(entry)
        return entry

    # ── Rendering ─────────────────────────────────────────────────────────────

    def to_element(self) -> ET.Element:
        root = ET.Element(
            MANIFEST_ROOT_TAG,
            {"name": _xml_safe(self.set_name), "description": _xml_safe(self.set_description)},
        )
        for entry in self.entries:
            tag = MANIFEST_DIRECTORY_TAG if entry.kind == EntityKind.DIRECTORY else MANIFEST_FILE_TAG
            node = ET.SubElement(root, tag)
            ET.SubElement(node, MANIFEST_PATH_TAG).text = _xml_safe(entry.saved_path)
            ET.SubElement(node, MANIFEST_ORIGINAL_PATH_TAG).text = _xml_safe(entry.original_path)
            if entry.kind != EntityKind.DIRECTORY:
                # Empty unless a hashing step ran upstream
                ET.SubElement(node, MANIFEST_MD5_TAG).text = _xml_safe(entry.md5 or "")
        return root

    def to_xml(self) -> str:
        """Render the manifest as a pretty-printed XML document."""
        root = self.to_element()
        ET.indent(root, space=MANIFEST_INDENT)
        return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"

    def serialize(self, path: Union[str, Path]) -> Path:
        """Write the manifest to ``path`` as UTF-8.

        Raises:
            ExportError: MANIFEST_WRITE_FAILED if the document cannot be written.
        """
        path = Path(path)
        try:
            write_text_atomic(self.to_xml(), path, encoding=MANIFEST_ENCODING)
        except (OSError, ValueError) as exc:
            raise ExportError(
                ExportErrorKind.MANIFEST_WRITE_FAILED,
                f"failed to write manifest '{path}': {exc}",
            ) from exc
        logger.info("Wrote manifest %s (%d entries)", path, len(self))
        return path


def load_manifest(path: Union[str, Path]) -> Manifest:
    """Parse a manifest document written by Manifest.serialize().

    Raises:
        xml.etree.ElementTree.ParseError: If the file is not well-formed XML.
        ValueError: If the root element is not a manifest root.
        OSError: If the file cannot be read.
    """
    root = ET.parse(str(path)).getroot()
    if root.tag != MANIFEST_ROOT_TAG:
        raise ValueError(f"{path} is not a manifest (root element {root.tag!r})")

    manifest = Manifest(root.get("name", ""), root.get("description", ""))
    for node in root:
        kind = EntityKind.DIRECTORY if node.tag == MANIFEST_DIRECTORY_TAG else EntityKind.FILE
        md5 = None
        if kind == EntityKind.FILE:
            md5 = node.findtext(MANIFEST_MD5_TAG) or ""
        manifest.add_entry(
            ManifestEntry(
                kind=kind,
                saved_path=node.findtext(MANIFEST_PATH_TAG) or "",
                original_path=node.findtext(MANIFEST_ORIGINAL_PATH_TAG) or "",
                md5=md5,
            )
        )
    return manifest
