"""Unit tests for interestingfiles.export.naming.

Covers:
- unique_file_name: extension, hidden file, no extension, multiple dots
- wrapper_dir_name: <name>_<id>
- safe_component: accepted names, rejected separators and traversal
"""

from __future__ import annotations

from pathlib import Path

import pytest

from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.export.naming import (
    child_path,
    safe_component,
    unique_file_name,
    wrapper_dir_name,
)


# ── unique_file_name ──────────────────────────────────────────────────────────────

class TestUniqueFileName:
    def test_id_inserted_before_extension(self):
        """report.txt with ids 5 and 9 must become report_5.txt and report_9.txt."""
        assert unique_file_name("report.txt", 5) == "report_5.txt"
        assert unique_file_name("report.txt", 9) == "report_9.txt"

    def test_hidden_file_gets_suffix_appended(self):
        """A leading dot is not an extension separator."""
        assert unique_file_name(".bashrc", 3) == ".bashrc_3"

    def test_name_without_dot_gets_suffix_appended(self):
        assert unique_file_name("Makefile", 12) == "Makefile_12"

    def test_only_last_dot_counts(self):
        """The id goes before the final extension only."""
        assert unique_file_name("archive.tar.gz", 7) == "archive.tar_7.gz"

    def test_hidden_file_with_extension(self):
        """A hidden file with a later dot still inserts before that dot."""
        assert unique_file_name(".config.bak", 4) == ".config_4.bak"

    def test_trailing_dot(self):
        assert unique_file_name("notes.", 8) == "notes_8."


# ── wrapper_dir_name ──────────────────────────────────────────────────────────────

class TestWrapperDirName:
    def test_wrapper_dir_name(self):
        assert wrapper_dir_name("Photos", 42) == "Photos_42"

    def test_wrapper_dir_name_keeps_dots(self):
        """Directory names are suffixed at the end, never before a dot."""
        assert wrapper_dir_name("backup.old", 6) == "backup.old_6"


# ── safe_component ────────────────────────────────────────────────────────────────

class TestSafeComponent:
    @pytest.mark.parametrize("name", ["report.txt", ".bashrc", "My Documents", "Фото"])
    def test_accepts_plain_names(self, name):
        assert safe_component(name, ExportErrorKind.FILE_COPY_FAILED) == name

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b", "C:", "bad\x00name"])
    def test_rejects_unsafe_names(self, name):
        with pytest.raises(ExportError) as exc_info:
            safe_component(name, ExportErrorKind.DIRECTORY_CREATE_FAILED, entity_id=17)

        assert exc_info.value.kind == ExportErrorKind.DIRECTORY_CREATE_FAILED
        assert exc_info.value.entity_id == 17

    def test_child_path_joins_one_component(self, tmp_path):
        assert child_path(tmp_path, "x.bin", ExportErrorKind.FILE_COPY_FAILED) == tmp_path / "x.bin"

    def test_child_path_blocks_traversal(self, tmp_path):
        with pytest.raises(ExportError):
            child_path(Path(tmp_path), "../escape", ExportErrorKind.DIRECTORY_CREATE_FAILED)
