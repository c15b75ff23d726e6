"""Configuration loading for storectl commands.

Resolution order, lowest priority first:

1. Built-in defaults derived from ``$STORECTL_HOME`` (or ``~/.storectl``).
2. A YAML file: ``--config PATH``, else ``$STORECTL_CONFIG``, else
   ``<home>/conf/storectl.yml`` when it exists.
3. Environment overrides (``STORECTL_JOURNAL_DIR``, ``STORECTL_BACKUP_DIR``).

Relative paths in the YAML file are resolved against the home directory.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

from storectl.exceptions import ConfigError

HOME_ENV = "STORECTL_HOME"
CONFIG_ENV = "STORECTL_CONFIG"
JOURNAL_DIR_ENV = "STORECTL_JOURNAL_DIR"
BACKUP_DIR_ENV = "STORECTL_BACKUP_DIR"

_KNOWN_KEYS: frozenset[str] = frozenset({"journal_dir", "backup_dir"})


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Resolved settings handed to commands through their context."""

    home: Path
    journal_dir: Path
    backup_dir: Path
    source: Path | None = None
    """Config file that contributed values, or ``None`` for defaults only."""


def default_home(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    value = env.get(HOME_ENV)
    if value:
        return Path(value).expanduser()
    return Path.home() / ".storectl"


def _read_yaml(path: Path) -> dict[str, str]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Config file {path} is not valid YAML.",
            hint=str(exc),
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at top level.")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(
            f"Unknown key(s) in {path}: {', '.join(map(str, unknown))}",
            hint=f"Supported keys: {', '.join(sorted(_KNOWN_KEYS))}",
        )
    for key, value in data.items():
        if not isinstance(value, str) or not value:
            raise ConfigError(f"Config key '{key}' in {path} must be a non-empty string.")
    return data


def _resolve(home: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else home / path


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> StoreConfig:
    """Build a :class:`StoreConfig` from defaults, file and environment.

    Parameters
    ----------
    config_path:
        File given with ``--config``.  It must exist.
    environ:
        Environment mapping; defaults to :data:`os.environ`.  Accepting
        it enables deterministic testing without monkeypatching.

    Raises
    ------
    ConfigError
        If the chosen file is missing, unreadable or malformed.
    """
    env = os.environ if environ is None else environ
    home = default_home(env)

    source: Path | None = None
    if config_path is not None:
        source = config_path.expanduser()
    elif env.get(CONFIG_ENV):
        source = Path(env[CONFIG_ENV]).expanduser()

    if source is not None and not source.is_file():
        raise ConfigError(f"Config file not found: {source}")
    if source is None:
        candidate = home / "conf" / "storectl.yml"
        if candidate.is_file():
            source = candidate

    values = _read_yaml(source) if source is not None else {}

    journal_dir = _resolve(home, values.get("journal_dir", "journal"))
    backup_dir = _resolve(home, values.get("backup_dir", "backups"))

    if env.get(JOURNAL_DIR_ENV):
        journal_dir = Path(env[JOURNAL_DIR_ENV]).expanduser()
    if env.get(BACKUP_DIR_ENV):
        backup_dir = Path(env[BACKUP_DIR_ENV]).expanduser()

    return StoreConfig(
        home=home,
        journal_dir=journal_dir,
        backup_dir=backup_dir,
        source=source,
    )
