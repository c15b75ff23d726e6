"""Resolve an argument vector into one command and run it.

Resolution walks three levels in order and fails fast at the first
token it cannot resolve::

    Start ──service──▶ ServiceResolved ──command──▶ CommandResolved ──flags──▶ Ready

* An unknown or missing service prints global usage.
* An unknown or missing command prints the service usage.
* Invalid flags print the command usage.
* ``-h``/``--help`` at any level prints that level's usage and succeeds.

Only when every level resolves is the command's context built and its
``run`` invoked, exactly once.  The dispatcher is the only place that
maps resolution and runtime failures to exit codes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from storectl.cli import exit_codes
from storectl.cli.console import console, escape, out, report_error
from storectl.cli.usage import (
    PROG,
    Printer,
    print_command_usage,
    print_global_usage,
    print_service_usage,
)
from storectl.core.flags import HELP_FLAGS, parse_flags, wants_help
from storectl.core.models import CommandContext, ParsedArgs
from storectl.core.protocols import Command
from storectl.core.registry import Registry
from storectl.core.service import Service
from storectl.exceptions import (
    CommandRuntimeError,
    FlagParseError,
    ResolutionError,
    UnknownCommandError,
    UnknownServiceError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of walking the argument vector.

    When :attr:`help` is ``True`` the deepest non-``None`` level is the
    one whose usage was requested and :attr:`args` is ``None``.
    Otherwise every field is populated and the command is ready to run.
    """

    service: Service | None = None
    command: Command | None = None
    args: ParsedArgs | None = None
    help: bool = False


def exit_code_for(exc: ResolutionError) -> int:
    """Map a resolution failure to its documented exit code."""
    if isinstance(exc, UnknownServiceError):
        return exit_codes.UNKNOWN_SERVICE
    if isinstance(exc, UnknownCommandError):
        return exit_codes.UNKNOWN_COMMAND
    return exit_codes.FLAG_PARSE_ERROR


class Dispatcher:
    """Drive one invocation against an explicitly supplied registry.

    Parameters
    ----------
    registry:
        The frozen registry built at startup.
    context_factory:
        Called once, only after resolution succeeds, to build the
        :class:`CommandContext` (configuration is loaded there so that
        ``--help`` never depends on it).
    """

    def __init__(
        self,
        registry: Registry,
        context_factory: Callable[[], CommandContext],
    ) -> None:
        self._registry = registry
        self._context_factory = context_factory

    # ------------------------------------------------------------------
    # Resolution (no side effects beyond lookups)
    # ------------------------------------------------------------------

    def resolve(self, argv: Sequence[str]) -> Resolution:
        """Resolve *argv* to a service, a command and parsed flags.

        Raises
        ------
        UnknownServiceError
            If the service token is missing or unknown.
        UnknownCommandError
            If the command token is missing or unknown.
        FlagParseError
            If an option appears where a name is expected, or the
            remaining tokens do not match the command's flag schema.
        """
        tokens = list(argv)

        # Start
        if not tokens:
            raise UnknownServiceError(
                "A service name is required.",
                hint=f"Run '{PROG} --help' to list available services.",
            )
        head = tokens[0]
        if head in HELP_FLAGS:
            return Resolution(help=True)
        if head.startswith("-"):
            raise FlagParseError(f"Unrecognised option '{head}'.")
        service = self._registry.lookup(head)
        logger.debug("resolved service %s", service.name)

        # ServiceResolved
        rest = tokens[1:]
        if not rest:
            raise UnknownCommandError(
                f"A command name is required for service '{service.name}'.",
                service=service,
            )
        head = rest[0]
        if head in HELP_FLAGS:
            return Resolution(service=service, help=True)
        if head.startswith("-"):
            raise FlagParseError(
                f"Unrecognised option '{head}' for service '{service.name}'.",
                service=service,
            )
        command = service.find_command(head)
        logger.debug("resolved command %s %s", service.name, command.name)

        # CommandResolved
        flag_tokens = rest[1:]
        if wants_help(flag_tokens):
            return Resolution(service=service, command=command, help=True)
        prog = f"{PROG} {service.name} {command.name}"
        try:
            args = parse_flags(prog, command.flag_schema(), flag_tokens)
        except FlagParseError as exc:
            raise FlagParseError(
                f"{prog}: {exc}",
                service=service,
                command=command,
            ) from None

        # Ready
        return Resolution(service=service, command=command, args=args)

    # ------------------------------------------------------------------
    # Full dispatch
    # ------------------------------------------------------------------

    def dispatch(self, argv: Sequence[str]) -> int:
        """Resolve and run *argv*, returning the process exit code.

        Resolution failures and :class:`CommandRuntimeError` are reported
        here.  Any other exception propagates to the process-level error
        boundary unchanged.
        """
        try:
            resolution = self.resolve(argv)
        except ResolutionError as exc:
            report_error(exc)
            console.print("")
            self._print_usage(exc.service, exc.command, target=console)
            return exit_code_for(exc)

        if resolution.help:
            self._print_usage(resolution.service, resolution.command, target=out)
            return exit_codes.SUCCESS

        assert resolution.command is not None and resolution.args is not None
        ctx = self._context_factory()
        logger.debug("running %s with %s", resolution.command.name, dict(resolution.args))

        try:
            outcome = resolution.command.run(ctx, resolution.args)
        except CommandRuntimeError as exc:
            logger.debug("command failed", exc_info=True)
            report_error(exc)
            return exit_codes.GENERAL_ERROR

        if outcome.message:
            out.print(escape(outcome.message))
        return exit_codes.SUCCESS

    def _print_usage(
        self,
        service: Service | None,
        command: Command | None,
        *,
        target: Printer,
    ) -> None:
        if service is None:
            print_global_usage(self._registry, target)
        elif command is None:
            print_service_usage(service, target)
        else:
            print_command_usage(service, command, target)
