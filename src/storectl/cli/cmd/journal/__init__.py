"""``storectl journal`` — journal maintenance commands."""

from __future__ import annotations

from storectl.cli.cmd.journal.backup import BackupCommand
from storectl.cli.cmd.journal.format import FormatCommand
from storectl.core.service import Service

SERVICE = Service(
    name="journal",
    description="Format, backup, and other journal related operations",
    commands=(
        FormatCommand(),
        BackupCommand(),
    ),
)
