"""Infrastructure layer — filesystem integration.

This layer wraps all interaction with the operating system.  Every raw
``OSError`` must be caught here and re-raised as a
:class:`~storectl.exceptions.StorectlError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by commands.
"""

from storectl.infra.journal_store import (
    JournalStatus,
    backup_journal,
    format_journal,
    inspect_journal,
)

__all__: list[str] = [
    "JournalStatus",
    "backup_journal",
    "format_journal",
    "inspect_journal",
]
