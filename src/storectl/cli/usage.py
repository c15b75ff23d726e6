"""Usage rendering for the three resolution levels.

* Global usage lists every registered service.
* Service usage lists the commands of one service.
* Command usage lists the flags of one command.

Rows are rendered as a borderless Rich table when Rich is installed,
otherwise as padded plain text, so help stays readable in minimal
environments.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from storectl.cli.console import escape, rich_available
from storectl.core.models import FlagSpec
from storectl.core.protocols import Command
from storectl.core.registry import Registry
from storectl.core.service import Service

PROG = "storectl"

GLOBAL_OPTIONS: tuple[tuple[str, str], ...] = (
    ("-h, --help", "Show this message and exit."),
    ("-V, --version", "Show the version and exit."),
    ("--debug", "Enable debug logging (or set STORECTL_DEBUG=1)."),
    ("--config PATH", "Read settings from PATH instead of the default file."),
)

_HELP_ROW: tuple[str, str] = ("-h, --help", "Show this message and exit.")


class Printer(Protocol):
    def print(self, *objects: object) -> None: ...


# ---------------------------------------------------------------------------
# Row helpers (pure)
# ---------------------------------------------------------------------------

def flag_rows(schema: Sequence[FlagSpec]) -> list[tuple[str, str]]:
    """Return ``(label, help)`` rows for a command's flag schema."""
    rows: list[tuple[str, str]] = []
    for spec in schema:
        if spec.is_positional:
            label = spec.metavar or spec.name.upper()
        else:
            label = spec.name if spec.short is None else f"{spec.short}, {spec.name}"
            if spec.takes_value:
                label = f"{label} {spec.metavar or spec.dest.upper()}"
        help_text = spec.help
        if spec.required:
            help_text = f"{help_text} (required)"
        rows.append((label, help_text))
    rows.append(_HELP_ROW)
    return rows


def command_synopsis(service: Service, command: Command) -> str:
    tokens = [PROG, service.name, command.name]
    schema = command.flag_schema()
    tokens.extend(spec.usage_token() for spec in schema if not spec.is_positional)
    tokens.extend(spec.usage_token() for spec in schema if spec.is_positional)
    return " ".join(tokens)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _print_rows(target: Printer, heading: str, rows: Sequence[tuple[str, str]]) -> None:
    target.print(f"{heading}:")
    if rich_available():
        from rich.table import Table

        table: Any = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        table.add_column("name", style="bold", no_wrap=True)
        table.add_column("description")
        for label, text in rows:
            table.add_row(escape(label), escape(text))
        target.print(table)
        return

    width = max(len(label) for label, _ in rows)
    for label, text in rows:
        target.print(f"  {label:<{width}}  {text}")


def _print_block(
    target: Printer,
    synopsis: str,
    description: str | None,
    sections: Sequence[tuple[str, Sequence[tuple[str, str]]]],
) -> None:
    target.print(f"Usage: {escape(synopsis)}")
    if description:
        target.print("")
        target.print(escape(description))
    for heading, rows in sections:
        if not rows:
            continue
        target.print("")
        _print_rows(target, heading, rows)


def print_global_usage(registry: Registry, target: Printer) -> None:
    """Print top-level usage listing every service with its description."""
    services = [(service.name, service.description) for service in registry.list_all()]
    _print_block(
        target,
        f"{PROG} [OPTIONS] <service> <command> [flags...] [args...]",
        "Command-line administration for a clustered storage system.",
        (("Services", services), ("Options", GLOBAL_OPTIONS)),
    )


def print_service_usage(service: Service, target: Printer) -> None:
    """Print usage for one service, listing only its own commands."""
    commands = [(command.name, command.description) for command in service.commands]
    _print_block(
        target,
        f"{PROG} {service.name} <command> [flags...] [args...]",
        service.description,
        (("Commands", commands), ("Options", (_HELP_ROW,))),
    )


def print_command_usage(service: Service, command: Command, target: Printer) -> None:
    """Print usage for one command, listing its flags."""
    _print_block(
        target,
        command_synopsis(service, command),
        command.description,
        (("Flags", flag_rows(command.flag_schema())),),
    )
