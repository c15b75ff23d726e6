"""Interactive confirmation prompts for destructive commands.

questionary is imported lazily so that non-interactive paths
(``--force``, ``--help``) work without it installed.
"""

from __future__ import annotations

from typing import Any

from storectl.exceptions import MissingDependencyError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Or pass --force to skip the confirmation prompt.",
        ) from exc
    return questionary


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question and return the answer.

    Returns ``False`` when the user cancels the prompt (Esc / Ctrl+C),
    since questionary's ``ask()`` reports cancellation as ``None``.
    """
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(message, default=default).ask()
    return bool(answer)
