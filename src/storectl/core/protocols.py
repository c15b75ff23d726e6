"""Protocols (interfaces) consumed by the core layer.

These define the contract every concrete command must satisfy.  Core
code depends ONLY on this protocol, never on concrete command
classes, so services can be authored independently.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from storectl.core.models import CommandContext, FlagSpec, Outcome, ParsedArgs


class Command(Protocol):
    """Contract for a single administrative operation.

    Any object exposing ``name``, ``description``, :meth:`flag_schema`
    and :meth:`run` satisfies this protocol structurally (no explicit
    inheritance required).
    """

    name: str
    """Command token typed after the service name (e.g. ``format``)."""

    description: str
    """One-line description listed in service usage."""

    def flag_schema(self) -> Sequence[FlagSpec]:
        """Return the flags and positional arguments this command accepts."""
        ...  # pragma: no cover

    def run(self, ctx: CommandContext, args: ParsedArgs) -> Outcome:
        """Perform the operation.

        Called at most once per dispatch; the core never retries.  All
        side effects (filesystem, network) belong to the command.

        Raises
        ------
        CommandRuntimeError
            When the operation fails.  The message is shown verbatim.
        """
        ...  # pragma: no cover
