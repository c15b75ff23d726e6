"""Tests for journal folder operations (infra/journal_store.py).

All filesystem work happens below ``tmp_path``.
"""

from __future__ import annotations

import tarfile
from datetime import datetime
from pathlib import Path

import pytest

from storectl.exceptions import JournalError
from storectl.infra import journal_store
from storectl.infra.journal_store import (
    backup_journal,
    backup_name,
    format_journal,
    inspect_journal,
)


def _populate(journal: Path) -> None:
    (journal / "logs").mkdir(parents=True)
    (journal / "logs" / "0x1-0x2").write_bytes(b"x" * 10)
    (journal / "checkpoint").write_bytes(b"y" * 5)


class TestInspect:
    def test_missing(self, tmp_path: Path) -> None:
        status = inspect_journal(tmp_path / "journal")
        assert not status.exists
        assert status.entries == 0

    def test_counts_entries_and_bytes(self, tmp_path: Path) -> None:
        journal = tmp_path / "journal"
        _populate(journal)
        status = inspect_journal(journal)
        assert status.exists
        assert status.entries == 3
        assert status.size_bytes == 15

    def test_file_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "journal"
        path.write_text("not a folder")
        with pytest.raises(JournalError, match="not a directory"):
            inspect_journal(path)


class TestFormat:
    def test_wipes_existing_folder(self, tmp_path: Path) -> None:
        journal = tmp_path / "journal"
        _populate(journal)
        before = format_journal(journal)
        assert before.exists
        assert before.entries == 3
        assert journal.is_dir()
        assert list(journal.iterdir()) == []

    def test_creates_missing_folder(self, tmp_path: Path) -> None:
        journal = tmp_path / "a" / "b" / "journal"
        before = format_journal(journal)
        assert not before.exists
        assert journal.is_dir()

    def test_refuses_regular_file(self, tmp_path: Path) -> None:
        path = tmp_path / "journal"
        path.write_text("keep me")
        with pytest.raises(JournalError):
            format_journal(path)
        assert path.read_text() == "keep me"

    def test_os_error_is_wrapped(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        journal = tmp_path / "journal"
        _populate(journal)

        def _boom(_path: Path) -> None:
            raise PermissionError("denied")

        monkeypatch.setattr(journal_store.shutil, "rmtree", _boom)
        with pytest.raises(JournalError) as exc_info:
            format_journal(journal)
        assert isinstance(exc_info.value.cause, PermissionError)
        assert exc_info.value.hint is not None


class TestBackup:
    def test_backup_name(self) -> None:
        assert backup_name(datetime(2024, 3, 9, 7, 5, 1)) == (
            "journal-backup-20240309-070501.tar.gz"
        )

    def test_writes_archive(self, tmp_path: Path) -> None:
        journal = tmp_path / "journal"
        _populate(journal)
        now = datetime(2024, 1, 2, 3, 4, 5)

        archive = backup_journal(journal, tmp_path / "backups", now=now)

        assert archive == tmp_path / "backups" / "journal-backup-20240102-030405.tar.gz"
        with tarfile.open(archive, "r:gz") as tar:
            names = set(tar.getnames())
        assert {"journal", "journal/logs", "journal/logs/0x1-0x2", "journal/checkpoint"} <= names

    def test_missing_journal(self, tmp_path: Path) -> None:
        with pytest.raises(JournalError, match="does not exist"):
            backup_journal(tmp_path / "journal", tmp_path / "backups")
        assert not (tmp_path / "backups").exists()

    def test_existing_archive_not_overwritten(self, tmp_path: Path) -> None:
        journal = tmp_path / "journal"
        _populate(journal)
        now = datetime(2024, 1, 2, 3, 4, 5)
        backup_journal(journal, tmp_path / "backups", now=now)
        with pytest.raises(JournalError, match="already exists"):
            backup_journal(journal, tmp_path / "backups", now=now)
