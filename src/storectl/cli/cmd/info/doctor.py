"""``storectl info doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment and configured journal folder are
usable.

No business logic resides here; it purely collects and displays
diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from collections.abc import Sequence

from storectl.cli.console import out
from storectl.config import StoreConfig
from storectl.core.models import CommandContext, FlagSpec, Outcome, ParsedArgs
from storectl.exceptions import CommandRuntimeError, JournalError
from storectl.infra.journal_store import inspect_journal
from storectl.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _storectl_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the storectl version row."""
    return "storectl", __version__, OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, OK


def _config_check(config: StoreConfig) -> tuple[str, str, str]:
    """Return (label, value, status) for the configuration source row."""
    if config.source is None:
        return "Config", "built-in defaults", OK
    return "Config", str(config.source), OK


def _journal_check(config: StoreConfig) -> tuple[str, str, str]:
    """Return (label, value, status) for the journal folder row."""
    try:
        status = inspect_journal(config.journal_dir)
    except JournalError as exc:
        return "Journal", str(exc), FAIL
    if not status.exists:
        return "Journal", f"{config.journal_dir} (missing, run 'journal format')", WARN
    return "Journal", f"{config.journal_dir} ({status.entries} entries)", OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nstorectl doctor")
    print("=" * 72)
    print(f"{'Component':<12} {'Value':<48} {'Status':<8}")
    print("-" * 72)
    for label, value, status in checks:
        print(f"{label:<12} {value:<48} {_status_plain(status):<8}")
    print()


def collect_checks(config: StoreConfig) -> list[tuple[str, str, str]]:
    return [
        _storectl_version_check(),
        _python_version_check(),
        _os_check(),
        _config_check(config),
        _journal_check(config),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config: StoreConfig) -> bool:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    bool
        ``True`` when no check failed (warnings are allowed).
    """
    checks = collect_checks(config)
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        return not has_failure

    table = Table(
        title="storectl doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    out.print()
    out.print(table)
    out.print()
    return not has_failure


class DoctorCommand:
    name = "doctor"
    description = "Check the Python runtime, configuration and journal folder"

    def flag_schema(self) -> Sequence[FlagSpec]:
        return ()

    def run(self, ctx: CommandContext, args: ParsedArgs) -> Outcome:
        if not run_doctor(ctx.config):
            raise CommandRuntimeError(
                "Some checks failed.",
                hint="Fix the rows marked FAIL and run 'storectl info doctor' again.",
            )
        return Outcome("All checks passed.")
