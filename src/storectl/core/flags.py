"""Parse a command's remaining tokens against its flag schema.

Parsing is delegated to :mod:`argparse`, configured so that it never
prints or exits on its own: every failure surfaces as
:class:`~storectl.exceptions.FlagParseError` and the dispatcher decides
what to show.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import NoReturn

from storectl.core.models import FlagSpec, ParsedArgs
from storectl.exceptions import FlagParseError, InvalidNameError

HELP_FLAGS: frozenset[str] = frozenset({"-h", "--help"})


class RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message: str) -> NoReturn:
        raise FlagParseError(message)


def wants_help(tokens: Sequence[str]) -> bool:
    """Return ``True`` if ``-h``/``--help`` appears before any ``--``."""
    for token in tokens:
        if token == "--":
            return False
        if token in HELP_FLAGS:
            return True
    return False


def _add_spec(parser: argparse.ArgumentParser, prog: str, spec: FlagSpec) -> None:
    if spec.name in HELP_FLAGS or spec.short in HELP_FLAGS:
        raise InvalidNameError(f"{prog}: flag {spec.name} shadows --help.")

    if spec.is_positional:
        parser.add_argument(
            spec.dest,
            nargs=None if spec.required else "?",
            default=spec.default,
            metavar=spec.metavar or spec.name.upper(),
            help=spec.help,
        )
        return

    names = [spec.name]
    if spec.short is not None:
        if not spec.short.startswith("-") or spec.short.startswith("--"):
            raise InvalidNameError(
                f"{prog}: short alias {spec.short!r} must look like '-x'.",
            )
        names.insert(0, spec.short)

    if spec.takes_value:
        parser.add_argument(
            *names,
            dest=spec.dest,
            default=spec.default,
            required=spec.required,
            metavar=spec.metavar or spec.dest.upper(),
            help=spec.help,
        )
    else:
        parser.add_argument(
            *names,
            dest=spec.dest,
            action="store_true",
            default=bool(spec.default),
            help=spec.help,
        )


def build_parser(prog: str, schema: Sequence[FlagSpec]) -> argparse.ArgumentParser:
    """Translate *schema* into an argparse parser.

    Raises
    ------
    InvalidNameError
        If a flag reuses ``-h``/``--help``, declares a short alias that
        is not a single-dash option, or collides with another flag.
    """
    parser = RaisingArgumentParser(prog=prog, add_help=False, allow_abbrev=False)
    for spec in schema:
        try:
            _add_spec(parser, prog, spec)
        except argparse.ArgumentError as exc:
            raise InvalidNameError(f"{prog}: {exc}") from exc
    return parser


def parse_flags(prog: str, schema: Sequence[FlagSpec], tokens: Sequence[str]) -> ParsedArgs:
    """Parse *tokens* against *schema*.

    Raises
    ------
    FlagParseError
        For unknown flags, missing required flags or values, and
        surplus positional arguments.
    """
    parser = build_parser(prog, schema)
    namespace = parser.parse_args(list(tokens))
    return ParsedArgs(vars(namespace))
