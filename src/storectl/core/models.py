"""Domain models for the storectl command core.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  They carry zero I/O and must remain pure
across the entire lifecycle.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from storectl.config import StoreConfig


# ---------------------------------------------------------------------------
# Flag schema
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FlagSpec:
    """One entry in a command's flag schema.

    A ``name`` starting with ``-`` declares an option (``--force``,
    ``--path``); any other name declares a positional argument.
    """

    name: str
    """Long option (``--path``) or positional name (``target``)."""

    help: str
    """One-line description rendered in command usage."""

    takes_value: bool = False
    """Options only: ``True`` for ``--path X``, ``False`` for a switch."""

    required: bool = False
    """Whether parsing fails when the flag or argument is absent."""

    default: Any = None
    """Value used when the flag is absent (switches default to ``False``)."""

    short: str | None = None
    """Optional single-dash alias such as ``-f``."""

    metavar: str | None = None
    """Placeholder shown in usage for the option's value."""

    @property
    def is_positional(self) -> bool:
        return not self.name.startswith("-")

    @property
    def dest(self) -> str:
        """Key under which the parsed value is stored (``--target-dir`` → ``target_dir``)."""
        return self.name.lstrip("-").replace("-", "_")

    def usage_token(self) -> str:
        """Render the flag the way it appears in a usage synopsis."""
        if self.is_positional:
            token = self.metavar or self.name.upper()
        elif self.takes_value:
            token = f"{self.name} {self.metavar or self.dest.upper()}"
        else:
            token = self.name
        return token if self.required else f"[{token}]"


# ---------------------------------------------------------------------------
# Parsed arguments
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedArgs(Mapping[str, Any]):
    """Read-only mapping of flag destinations to parsed values."""

    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandContext:
    """Everything a command receives besides its own arguments."""

    config: StoreConfig
    debug: bool = False


@dataclass(frozen=True, slots=True)
class Outcome:
    """Successful result of :meth:`Command.run`.

    Failures are never returned; they are raised as
    :class:`~storectl.exceptions.CommandRuntimeError`.
    """

    message: str | None = None
    """Optional informational output printed on stdout."""
