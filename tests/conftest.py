"""Shared pytest fixtures and configuration for the storectl test suite.

Guidelines
----------
* No network access in any test.
* Filesystem access only below ``tmp_path``.
* Every test runs with an isolated ``STORECTL_HOME``.
* Tests must not depend on the user's real configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest

from storectl.config import StoreConfig
from storectl.core.models import CommandContext, FlagSpec, Outcome, ParsedArgs
from storectl.core.registry import Registry
from storectl.core.service import Service


class RecordingCommand:
    """Command double that records every ``run`` call."""

    def __init__(
        self,
        name: str,
        description: str = "test command",
        *,
        schema: Sequence[FlagSpec] = (),
        outcome: Outcome | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.name = name
        self.description = description
        self._schema = tuple(schema)
        self._outcome = outcome or Outcome()
        self._error = error
        self.calls: list[tuple[CommandContext, ParsedArgs]] = []

    def flag_schema(self) -> Sequence[FlagSpec]:
        return self._schema

    def run(self, ctx: CommandContext, args: ParsedArgs) -> Outcome:
        self.calls.append((ctx, args))
        if self._error is not None:
            raise self._error
        return self._outcome


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point STORECTL_HOME at a temp dir and strip ambient overrides."""
    home = tmp_path / "storectl-home"
    monkeypatch.setenv("STORECTL_HOME", str(home))
    for name in (
        "STORECTL_CONFIG",
        "STORECTL_JOURNAL_DIR",
        "STORECTL_BACKUP_DIR",
        "STORECTL_DEBUG",
        "FORCE_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("COLUMNS", "200")
    return home


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo ``configure_logging`` so handlers never leak between tests."""
    yield
    logger = logging.getLogger("storectl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def make_command() -> Callable[..., RecordingCommand]:
    return RecordingCommand


@pytest.fixture()
def store_config(tmp_path: Path) -> StoreConfig:
    home = tmp_path / "home"
    return StoreConfig(
        home=home,
        journal_dir=home / "journal",
        backup_dir=home / "backups",
    )


@pytest.fixture()
def context(store_config: StoreConfig) -> CommandContext:
    return CommandContext(config=store_config)


@pytest.fixture()
def format_command() -> RecordingCommand:
    return RecordingCommand("format", "Format the journal")


@pytest.fixture()
def journal_registry(format_command: RecordingCommand) -> Registry:
    """Registry holding Service{journal: [format]} only."""
    return Registry.from_services(
        [
            Service(
                name="journal",
                description="Format, backup, and other journal related operations",
                commands=[format_command],
            ),
        ]
    )
