"""Unit tests for interestingfiles.export.manifest.

Covers:
- Manifest accumulation: entry order, add_entity hash handling
- to_xml: root attributes, SavedFile/SavedDirectory children, MD5 presence
- to_xml: control characters and lone surrogates written as visible escapes
- serialize: UTF-8 file with declaration and indentation, write failure
- load_manifest: parse a written document back
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.export.manifest import Manifest, load_manifest
from interestingfiles.models.entities import EntityKind, FileEntity
from interestingfiles.models.export import ManifestEntry


# ── Helpers ───────────────────────────────────────────────────────────────────────

def _parse(manifest: Manifest) -> ET.Element:
    return ET.fromstring(manifest.to_xml().encode("utf-8"))


def _file(entity_id: int = 1, md5=None) -> FileEntity:
    return FileEntity(id=entity_id, name="a.txt", kind=EntityKind.FILE, path="/case/a.txt", md5=md5)


def _dir(entity_id: int = 2) -> FileEntity:
    return FileEntity(id=entity_id, name="D", kind=EntityKind.DIRECTORY, path="/case/D")


# ── Accumulation ──────────────────────────────────────────────────────────────────

class TestManifestEntries:
    def test_entries_kept_in_call_order(self):
        manifest = Manifest("Docs")
        manifest.add_entity(_dir(), "/out/D_2/D")
        manifest.add_entity(_file(), "/out/D_2/D/a.txt")

        kinds = [e.kind for e in manifest.entries]
        assert kinds == [EntityKind.DIRECTORY, EntityKind.FILE]
        assert len(manifest) == 2

    def test_add_entity_records_paths_and_hash(self):
        manifest = Manifest("Docs")
        entry = manifest.add_entity(_file(md5="abc123"), "/out/a_1.txt")

        assert entry == ManifestEntry(
            kind=EntityKind.FILE,
            saved_path="/out/a_1.txt",
            original_path="/case/a.txt",
            md5="abc123",
        )

    def test_missing_hash_becomes_empty_string(self):
        entry = Manifest("Docs").add_entity(_file(md5=None), "/out/a_1.txt")
        assert entry.md5 == ""

    def test_directory_entry_has_no_hash(self):
        entry = Manifest("Docs").add_entity(_dir(), "/out/D_2/D")
        assert entry.md5 is None

    def test_entries_property_is_a_copy(self):
        manifest = Manifest("Docs")
        manifest.entries.append("junk")
        assert len(manifest) == 0


# ── to_xml ────────────────────────────────────────────────────────────────────────

class TestManifestXml:
    def test_empty_manifest_has_named_root(self):
        """A set with nothing exported still yields a root with name and description."""
        root = _parse(Manifest("Docs", "Office documents"))

        assert root.tag == "InterestingFileSet"
        assert root.get("name") == "Docs"
        assert root.get("description") == "Office documents"
        assert len(root) == 0

    def test_file_entry_layout(self):
        manifest = Manifest("Docs")
        manifest.add_entity(_file(md5="abc123"), "/out/a_1.txt")
        node = _parse(manifest)[0]

        assert node.tag == "SavedFile"
        assert [child.tag for child in node] == ["Path", "OriginalPath", "MD5"]
        assert node.findtext("Path") == "/out/a_1.txt"
        assert node.findtext("OriginalPath") == "/case/a.txt"
        assert node.findtext("MD5") == "abc123"

    def test_file_without_hash_has_empty_md5_node(self):
        manifest = Manifest("Docs")
        manifest.add_entity(_file(), "/out/a_1.txt")
        node = _parse(manifest)[0]

        assert node.find("MD5") is not None
        assert node.findtext("MD5") == ""

    def test_directory_entry_layout(self):
        manifest = Manifest("Docs")
        manifest.add_entity(_dir(), "/out/D_2/D")
        node = _parse(manifest)[0]

        assert node.tag == "SavedDirectory"
        assert [child.tag for child in node] == ["Path", "OriginalPath"]

    def test_special_characters_are_escaped(self):
        manifest = Manifest('R&D <"set">', "a & b")
        root = _parse(manifest)

        assert root.get("name") == 'R&D <"set">'
        assert root.get("description") == "a & b"

    def test_control_characters_written_as_escapes(self):
        """Names XML cannot carry still produce a well-formed document."""
        entity = FileEntity(id=7, name="a\x01b.txt", kind=EntityKind.FILE, path="/case/a\x01b.txt")
        manifest = Manifest("Odd\x1fSet", "Odd\x00description")
        manifest.add_entity(entity, "/out/Odd\x1fSet/a\x01b_7.txt")

        root = _parse(manifest)
        node = root[0]

        assert root.get("name") == "Odd\\x1fSet"
        assert root.get("description") == "Odd\\x00description"
        assert node.findtext("Path") == "/out/Odd\\x1fSet/a\\x01b_7.txt"
        assert node.findtext("OriginalPath") == "/case/a\\x01b.txt"

    def test_lone_surrogate_written_as_escape(self):
        entity = FileEntity(id=8, name="bad\udc80.txt", kind=EntityKind.FILE, path="/case/bad\udc80.txt")
        manifest = Manifest("Docs")
        manifest.add_entity(entity, "/out/bad_8.txt")

        assert _parse(manifest)[0].findtext("OriginalPath") == "/case/bad\\udc80.txt"

    def test_document_is_pretty_printed(self):
        manifest = Manifest("Docs")
        manifest.add_entity(_file(), "/out/a_1.txt")
        text = manifest.to_xml()

        assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        assert "\n  <SavedFile>\n    <Path>" in text


# ── serialize / load_manifest ─────────────────────────────────────────────────────

class TestManifestSerialize:
    def test_serialize_writes_utf8_file(self, tmp_path):
        manifest = Manifest("Фото", "снимки")
        manifest.add_entity(_file(md5="ff"), "/out/a_1.txt")
        target = tmp_path / "Фото" / "Фото.manifest"

        written = manifest.serialize(target)

        assert written == target
        raw = target.read_bytes()
        assert "снимки".encode("utf-8") in raw
        assert not list(target.parent.glob("*.tmp"))

    def test_serialize_failure_raises_manifest_write_failed(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(ExportError) as exc_info:
            Manifest("Docs").serialize(blocker / "Docs.manifest")

        assert exc_info.value.kind == ExportErrorKind.MANIFEST_WRITE_FAILED

    def test_load_manifest_reads_back_entries(self, tmp_path):
        manifest = Manifest("Docs", "Office documents")
        manifest.add_entity(_dir(), "/out/D_2/D")
        manifest.add_entity(_file(md5=None), "/out/D_2/D/a.txt")
        path = manifest.serialize(tmp_path / "Docs.manifest")

        loaded = load_manifest(path)

        assert loaded.set_name == "Docs"
        assert loaded.set_description == "Office documents"
        assert loaded.entries == manifest.entries

    def test_load_manifest_rejects_other_documents(self, tmp_path):
        path = tmp_path / "other.xml"
        path.write_text("<Something/>", encoding="utf-8")

        with pytest.raises(ValueError):
            load_manifest(path)
