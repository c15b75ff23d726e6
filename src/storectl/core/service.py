"""Service declaration — a named, described group of related commands."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from storectl.core.protocols import Command
from storectl.exceptions import UnknownCommandError

NAME_PATTERN: re.Pattern[str] = re.compile(r"^[a-z][a-z0-9-]*$")
"""Charset shared by service and command names."""


@dataclass(frozen=True, slots=True)
class Service:
    """Immutable group of commands registered under one service name.

    Construction does not validate. The :class:`~storectl.core.registry.Registry`
    checks names, emptiness and duplicates at registration time so that
    every rule violation surfaces as a typed registration error.
    """

    name: str
    description: str
    commands: Sequence[Command]

    def __post_init__(self) -> None:
        object.__setattr__(self, "commands", tuple(self.commands))

    def find_command(self, name: str) -> Command:
        """Return the command called exactly *name* (case-sensitive).

        Raises
        ------
        UnknownCommandError
            If no command of this service has that name.
        """
        for command in self.commands:
            if command.name == name:
                return command
        raise UnknownCommandError(
            f"Unknown command '{name}' for service '{self.name}'.",
            hint=f"Run 'storectl {self.name} --help' to list its commands.",
            service=self,
        )

    def command_names(self) -> tuple[str, ...]:
        return tuple(command.name for command in self.commands)
