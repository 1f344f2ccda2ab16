"""Shared pytest fixtures for Interesting Files Export tests.

Conventions:
- Cases are assembled in memory with InMemoryCaseStore; no fixture files needed
- Every export writes under pytest's tmp_path
- Store failures are injected with monkeypatch, never by touching real devices
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest

from config.settings import ExportConfig
from interestingfiles.stores.memory import InMemoryCaseStore


# ── Case fixtures ────────────────────────────────────────────────────────────────

@pytest.fixture
def case_store() -> InMemoryCaseStore:
    """Small case with flagged files and one flagged directory tree.

    /vol1/Photos                (dir 42)            flagged: Pictures
        beach.jpg               (file 43, md5)
        2023/                   (dir 44)
            party.png           (file 45, no md5)
        empty/                  (dir 46)
    /vol1/docs/report.txt       (file 5, md5)       flagged: Documents
    /vol1/other/report.txt      (file 9)            flagged: Documents
    /home/user/.bashrc          (file 3)            flagged: Config
    """
    store = InMemoryCaseStore()
    store.add_directory(42, "Photos", path="/vol1/Photos")
    store.add_file(43, "beach.jpg", parent_id=42, content=b"jpeg bytes", md5="5d41402abc4b2a76b9719d911017c592")
    store.add_directory(44, "2023", parent_id=42)
    store.add_file(45, "party.png", parent_id=44, content=b"png bytes")
    store.add_directory(46, "empty", parent_id=42)

    store.add_file(5, "report.txt", content=b"report five", md5="0cc175b9c0f1b6a831c399e269772661",
                   path="/vol1/docs/report.txt")
    store.add_file(9, "report.txt", content=b"report nine", path="/vol1/other/report.txt")
    store.add_file(3, ".bashrc", content=b"export PATH=$PATH", path="/home/user/.bashrc")

    store.flag(5, "Documents", "Office documents")
    store.flag(9, "Documents", "Office documents")
    store.flag(42, "Pictures", "Image folders")
    store.flag(3, "Config", "Shell configuration")
    return store


@pytest.fixture
def export_config(tmp_path) -> ExportConfig:
    """ExportConfig with output paths inside tmp_path and sequential export."""
    return ExportConfig(
        output_root=str(tmp_path / "out"),
        output_dir=str(tmp_path / "host"),
        max_workers=1,
        log_level="WARNING",
        log_config=None,
    )


@pytest.fixture
def output_root(tmp_path) -> Path:
    return tmp_path / "out"


# ── Failure injection ────────────────────────────────────────────────────────────

@pytest.fixture
def fail_copy(monkeypatch):
    """Make ``store.copy_content`` raise OSError for the given entity ids.

    Usage:
        def test_something(case_store, fail_copy):
            fail_copy(case_store, {9})
    """

    def _apply(store, failing_ids: Iterable[int]) -> None:
        failing = set(failing_ids)
        original = store.copy_content

        def _copy(entity, destination):
            if entity.id in failing:
                raise OSError(f"simulated read error for entity {entity.id}")
            return original(entity, destination)

        monkeypatch.setattr(store, "copy_content", _copy)

    return _apply
