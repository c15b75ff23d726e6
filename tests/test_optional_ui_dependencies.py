"""Regression tests for optional CLI UI dependencies (rich/questionary).

These tests verify bootstrap commands are resilient when optional UI
packages are missing, and the interactive format flow fails cleanly
only when the prompt is actually needed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from storectl.cli import exit_codes
from storectl.cli.app import main
from storectl.exceptions import MissingDependencyError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def test_help_works_without_rich_or_questionary(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    assert main(["--help"]) == exit_codes.SUCCESS
    out = capsys.readouterr().out
    assert "Services:" in out
    assert "journal" in out


def test_command_help_works_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    assert main(["journal", "format", "--help"]) == exit_codes.SUCCESS
    out = capsys.readouterr().out
    assert "-f, --force" in out
    assert "--path PATH" in out


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_unknown_service_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    assert main(["logs", "format"]) == exit_codes.UNKNOWN_SERVICE
    assert "Unknown service 'logs'" in capsys.readouterr().err


def test_doctor_works_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["info", "doctor"])
    assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)
    assert "storectl doctor" in capsys.readouterr().out


def test_debug_logging_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    assert main(["--debug", "info", "version"]) == exit_codes.SUCCESS


def test_format_prompt_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    _hide_questionary(monkeypatch)
    journal = tmp_path / "journal"
    journal.mkdir()
    (journal / "edits.log").write_text("entry")

    with pytest.raises(MissingDependencyError, match="questionary is not installed"):
        main(["journal", "format", "--path", str(journal)])
    assert (journal / "edits.log").exists()


def test_forced_format_works_without_questionary(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    _hide_questionary(monkeypatch)
    journal = tmp_path / "journal"

    assert main(["journal", "format", "--force", "--path", str(journal)]) == exit_codes.SUCCESS
    assert journal.is_dir()
