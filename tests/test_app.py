"""Tests for the entry point and process-level error boundary (cli/app.py)."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from storectl.cli import app as app_module
from storectl.cli import exit_codes
from storectl.cli.app import cli, main, split_global_args
from storectl.exceptions import ConfigError, DuplicateServiceError


# ---------------------------------------------------------------------------
# Global option splitting
# ---------------------------------------------------------------------------

class TestSplitGlobalArgs:
    @pytest.mark.parametrize(
        ("argv", "global_part", "rest"),
        [
            ([], [], []),
            (["journal", "format"], [], ["journal", "format"]),
            (["--debug", "journal", "format"], ["--debug"], ["journal", "format"]),
            (
                ["--config", "c.yml", "journal", "format", "--debug"],
                ["--config", "c.yml"],
                ["journal", "format", "--debug"],
            ),
            (["--config=c.yml", "info"], ["--config=c.yml"], ["info"]),
            (["--debug", "--help"], ["--debug"], ["--help"]),
            (["--bogus", "journal"], [], ["--bogus", "journal"]),
        ],
    )
    def test_split(self, argv: list[str], global_part: list[str], rest: list[str]) -> None:
        assert split_global_args(argv) == (global_part, rest)


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------

class TestMain:
    def test_unknown_global_option(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--bogus"]) == exit_codes.FLAG_PARSE_ERROR
        assert "--bogus" in capsys.readouterr().err

    def test_config_without_value(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--config"]) == exit_codes.FLAG_PARSE_ERROR
        err = capsys.readouterr().err
        assert "--config" in err
        assert "Services:" in err

    def test_debug_enables_debug_logging(self) -> None:
        assert main(["--debug", "info", "version"]) == exit_codes.SUCCESS
        assert logging.getLogger("storectl").level == logging.DEBUG

    def test_debug_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORECTL_DEBUG", "1")
        assert main(["info", "version"]) == exit_codes.SUCCESS
        assert logging.getLogger("storectl").level == logging.DEBUG

    def test_default_log_level_is_warning(self) -> None:
        assert main(["info", "version"]) == exit_codes.SUCCESS
        assert logging.getLogger("storectl").level == logging.WARNING

    def test_config_file_used(self, tmp_path: Path) -> None:
        journal = tmp_path / "from-config"
        config = tmp_path / "storectl.yml"
        config.write_text(f"journal_dir: {journal}\n", encoding="utf-8")

        code = main(["--config", str(config), "journal", "format", "--force"])

        assert code == exit_codes.SUCCESS
        assert journal.is_dir()

    def test_missing_config_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            main(["--config", str(tmp_path / "nope.yml"), "info", "version"])

    def test_help_does_not_load_config(self, tmp_path: Path) -> None:
        code = main(["--config", str(tmp_path / "nope.yml"), "journal", "--help"])
        assert code == exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# cli() error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run_cli(self, monkeypatch: pytest.MonkeyPatch, argv: list[str]) -> int:
        monkeypatch.setattr(sys, "argv", ["storectl", *argv])
        with pytest.raises(SystemExit) as exc_info:
            cli()
        code = exc_info.value.code
        assert isinstance(code, int)
        return code

    def test_success(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run_cli(monkeypatch, ["info", "version"]) == exit_codes.SUCCESS

    def test_resolution_failure_code_passes_through(
        self, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        assert self._run_cli(monkeypatch, ["logs"]) == exit_codes.UNKNOWN_SERVICE

    def test_known_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        argv = ["--config", str(tmp_path / "nope.yml"), "info", "version"]
        assert self._run_cli(monkeypatch, argv) == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Config file not found" in err
        assert "Traceback" not in err

    def test_registration_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def _broken() -> None:
            raise DuplicateServiceError("Service 'journal' is already registered.")

        monkeypatch.setattr(app_module, "build_registry", _broken)
        assert self._run_cli(monkeypatch, ["info"]) == exit_codes.UNEXPECTED_ERROR
        err = capsys.readouterr().err
        assert "registry is invalid" in err
        assert "already registered" in err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _interrupt(*_args: object, **_kwargs: object) -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_module, "main", _interrupt)
        assert self._run_cli(monkeypatch, []) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def _crash(*_args: object, **_kwargs: object) -> int:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "main", _crash)
        assert self._run_cli(monkeypatch, []) == exit_codes.UNEXPECTED_ERROR
        err = capsys.readouterr().err
        assert "RuntimeError: kaboom" in err
        assert "Please report this issue" in err
