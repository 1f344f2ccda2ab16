"""Unit tests for interestingfiles.export.directory_exporter.

Covers:
- export_directory: wrapper/inner layout, recursive contents, empty folders
- manifest: one entry for the flagged directory, then its files in visit order
- corrupt hierarchies: parent cycles and excessive depth
- failures mid-directory: earlier entries kept, the rest abandoned
"""

from __future__ import annotations

import pytest

from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.export.directory_exporter import export_directory
from interestingfiles.export.manifest import Manifest
from interestingfiles.models.entities import EntityKind, FileEntity
from interestingfiles.stores.memory import InMemoryCaseStore


# ── Layout ────────────────────────────────────────────────────────────────────────

class TestExportDirectoryLayout:
    def test_wrapper_and_inner_directories(self, case_store, tmp_path):
        inner = export_directory(case_store, case_store.get_entity(42), tmp_path, Manifest("Pictures"))

        assert inner == tmp_path / "Photos_42" / "Photos"
        assert inner.is_dir()

    def test_contents_mirrored_under_plain_names(self, case_store, tmp_path):
        inner = export_directory(case_store, case_store.get_entity(42), tmp_path, Manifest("Pictures"))

        assert (inner / "beach.jpg").read_bytes() == b"jpeg bytes"
        assert (inner / "2023" / "party.png").read_bytes() == b"png bytes"

    def test_empty_subdirectory_is_created(self, case_store, tmp_path):
        inner = export_directory(case_store, case_store.get_entity(42), tmp_path, Manifest("Pictures"))

        assert (inner / "empty").is_dir()
        assert list((inner / "empty").iterdir()) == []

    def test_empty_flagged_directory(self, tmp_path):
        store = InMemoryCaseStore()
        entity = store.add_directory(7, "Nothing", path="/vol1/Nothing")
        manifest = Manifest("Set")

        inner = export_directory(store, entity, tmp_path, manifest)

        assert inner.is_dir()
        assert [e.kind for e in manifest.entries] == [EntityKind.DIRECTORY]

    def test_same_name_directories_do_not_collide(self, tmp_path):
        store = InMemoryCaseStore()
        first = store.add_directory(1, "Data", path="/a/Data")
        second = store.add_directory(2, "Data", path="/b/Data")
        manifest = Manifest("Set")

        export_directory(store, first, tmp_path, manifest)
        export_directory(store, second, tmp_path, manifest)

        assert (tmp_path / "Data_1" / "Data").is_dir()
        assert (tmp_path / "Data_2" / "Data").is_dir()


# ── Manifest entries ──────────────────────────────────────────────────────────────

class TestExportDirectoryManifest:
    def test_directory_entry_first_then_files(self, case_store, tmp_path):
        """Nested folders get no entry of their own; their files do."""
        manifest = Manifest("Pictures")
        inner = export_directory(case_store, case_store.get_entity(42), tmp_path, manifest)

        entries = manifest.entries
        assert [e.kind for e in entries] == [EntityKind.DIRECTORY, EntityKind.FILE, EntityKind.FILE]
        assert entries[0].saved_path == str(inner)
        assert entries[0].original_path == "/vol1/Photos"
        assert entries[0].md5 is None
        assert entries[1].saved_path == str(inner / "beach.jpg")
        assert entries[2].saved_path == str(inner / "2023" / "party.png")
        assert entries[2].original_path == "/vol1/Photos/2023/party.png"


# ── Corrupt hierarchies ───────────────────────────────────────────────────────────

class _CyclicStore(InMemoryCaseStore):
    """Store whose directories 1 and 2 list each other as children."""

    def __init__(self) -> None:
        super().__init__()
        self._a = FileEntity(id=1, name="A", kind=EntityKind.DIRECTORY, path="/A")
        self._b = FileEntity(id=2, name="B", kind=EntityKind.DIRECTORY, parent_id=1, path="/A/B")

    def get_entity(self, entity_id):
        return {1: self._a, 2: self._b}[entity_id]

    def list_children(self, parent_id):
        return [self._b] if parent_id == 1 else [self._a]


class TestCorruptHierarchy:
    def test_cycle_detected(self, tmp_path):
        store = _CyclicStore()

        with pytest.raises(ExportError) as exc_info:
            export_directory(store, store.get_entity(1), tmp_path, Manifest("Set"))

        assert exc_info.value.kind == ExportErrorKind.CORRUPT_HIERARCHY
        assert exc_info.value.entity_id == 1

    def test_depth_limit(self, tmp_path):
        store = InMemoryCaseStore()
        store.add_directory(1, "d1")
        for entity_id in range(2, 6):
            store.add_directory(entity_id, f"d{entity_id}", parent_id=entity_id - 1)

        with pytest.raises(ExportError) as exc_info:
            export_directory(store, store.get_entity(1), tmp_path, Manifest("Set"), max_depth=2)

        assert exc_info.value.kind == ExportErrorKind.CORRUPT_HIERARCHY

    def test_depth_within_limit_succeeds(self, tmp_path):
        store = InMemoryCaseStore()
        store.add_directory(1, "d1")
        store.add_directory(2, "d2", parent_id=1)
        store.add_file(3, "leaf.txt", parent_id=2, content=b"leaf")

        inner = export_directory(store, store.get_entity(1), tmp_path, Manifest("Set"), max_depth=2)

        assert (inner / "d2" / "leaf.txt").read_bytes() == b"leaf"


# ── Failures ──────────────────────────────────────────────────────────────────────

class TestExportDirectoryFailures:
    def test_copy_failure_abandons_rest_of_directory(self, tmp_path, fail_copy):
        store = InMemoryCaseStore()
        store.add_directory(10, "Dir")
        store.add_file(11, "one.txt", parent_id=10, content=b"1")
        store.add_file(12, "two.txt", parent_id=10, content=b"2")
        store.add_file(13, "three.txt", parent_id=10, content=b"3")
        fail_copy(store, {12})
        manifest = Manifest("Set")

        with pytest.raises(ExportError) as exc_info:
            export_directory(store, store.get_entity(10), tmp_path, manifest)

        assert exc_info.value.kind == ExportErrorKind.FILE_COPY_FAILED
        assert exc_info.value.entity_id == 12
        saved = [e.saved_path for e in manifest.entries]
        inner = tmp_path / "Dir_10" / "Dir"
        assert saved == [str(inner), str(inner / "one.txt")]
        assert not (inner / "three.txt").exists()

    def test_blocked_wrapper_raises_directory_create_failed(self, case_store, tmp_path):
        (tmp_path / "Photos_42").write_text("in the way")
        manifest = Manifest("Pictures")

        with pytest.raises(ExportError) as exc_info:
            export_directory(case_store, case_store.get_entity(42), tmp_path, manifest)

        assert exc_info.value.kind == ExportErrorKind.DIRECTORY_CREATE_FAILED
        assert exc_info.value.entity_id == 42
        assert len(manifest) == 0

    def test_unsafe_child_name_rejected(self, tmp_path):
        store = InMemoryCaseStore()
        store.add_directory(1, "Dir")
        store.add_directory(2, "..", parent_id=1)

        with pytest.raises(ExportError) as exc_info:
            export_directory(store, store.get_entity(1), tmp_path, Manifest("Set"))

        assert exc_info.value.kind == ExportErrorKind.DIRECTORY_CREATE_FAILED
        assert exc_info.value.entity_id == 2
