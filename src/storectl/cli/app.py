"""CLI application entry point for storectl.

This module is the **sole process-level error boundary**.  It catches
:class:`~storectl.exceptions.StorectlError`, ``KeyboardInterrupt``, and
any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* Global options (``--debug``, ``--config``, ``--version``) are only
  recognised before the service name; everything from the service name
  on belongs to the :class:`~storectl.cli.dispatcher.Dispatcher`.
* The registry is assembled here, once, from
  :data:`storectl.cli.cmd.SERVICES` and passed to the dispatcher.
* Configuration is loaded lazily, only when a command is about to run.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from storectl.cli import exit_codes
from storectl.cli.console import console, escape, report_error
from storectl.cli.dispatcher import Dispatcher
from storectl.cli.usage import PROG, print_global_usage
from storectl.config import load_config
from storectl.core.flags import HELP_FLAGS, RaisingArgumentParser
from storectl.core.models import CommandContext
from storectl.core.registry import Registry
from storectl.core.service import Service
from storectl.exceptions import FlagParseError, RegistrationError, StorectlError
from storectl.logging_config import configure_logging, debug_requested
from storectl.version import __version__

_VALUE_OPTIONS: frozenset[str] = frozenset({"--config"})
_SWITCH_OPTIONS: frozenset[str] = frozenset({"--debug", "-V", "--version"})


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the parser for options that precede the service name.

    ``--help`` is not declared here: help at every level is rendered by
    the dispatcher so it can list the registered services.
    """
    parser = RaisingArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--debug", action="store_true", default=False)
    parser.add_argument("--config", type=Path, default=None, metavar="PATH")
    return parser


def split_global_args(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split *argv* into leading global options and the dispatch tokens.

    Scanning stops at the first token that is not a known global
    option, so unknown options and ``--help`` reach the dispatcher.
    """
    tokens = list(argv)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token in HELP_FLAGS or not token.startswith("-"):
            break
        if token in _VALUE_OPTIONS:
            index += 2
        elif token in _SWITCH_OPTIONS or token.split("=", 1)[0] in _VALUE_OPTIONS:
            index += 1
        else:
            break
    return tokens[:index], tokens[index:]


def build_registry(services: Iterable[Service] | None = None) -> Registry:
    """Assemble and freeze the registry.

    Raises
    ------
    RegistrationError
        If the declarations break a registry invariant.
    """
    if services is None:
        from storectl.cli.cmd import SERVICES

        services = SERVICES
    return Registry.from_services(services)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None, *, registry: Registry | None = None) -> int:
    """Run the storectl CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    registry:
        Pre-built registry; defaults to the shipped services.

    Returns
    -------
    int
        OS process exit code.
    """
    tokens = sys.argv[1:] if argv is None else list(argv)
    global_tokens, dispatch_tokens = split_global_args(tokens)

    if registry is None:
        registry = build_registry()

    try:
        options = _build_parser().parse_args(global_tokens)
    except FlagParseError as exc:
        report_error(exc)
        console.print("")
        print_global_usage(registry, console)
        return exit_codes.FLAG_PARSE_ERROR

    debug = debug_requested(options.debug)
    configure_logging(debug)

    def context_factory() -> CommandContext:
        return CommandContext(config=load_config(options.config), debug=debug)

    return Dispatcher(registry, context_factory).dispatch(dispatch_tokens)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except RegistrationError as exc:
        console.print(
            "[bold red]Internal error:[/bold red] the command registry is invalid.\n"
            f"  {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
    except StorectlError as exc:
        report_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
