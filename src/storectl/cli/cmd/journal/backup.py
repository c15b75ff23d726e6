"""``storectl journal backup`` — archive the journal folder."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from storectl.core.models import CommandContext, FlagSpec, Outcome, ParsedArgs
from storectl.infra.journal_store import backup_journal


class BackupCommand:
    name = "backup"
    description = "Write a timestamped .tar.gz backup of the journal folder"

    def flag_schema(self) -> Sequence[FlagSpec]:
        return (
            FlagSpec(
                "--path",
                "Journal folder to back up instead of the configured one.",
                takes_value=True,
                metavar="PATH",
            ),
            FlagSpec(
                "--target-dir",
                "Directory that receives the archive (default: configured backup_dir).",
                takes_value=True,
                metavar="DIR",
            ),
        )

    def run(self, ctx: CommandContext, args: ParsedArgs) -> Outcome:
        path = Path(args["path"]).expanduser() if args["path"] else ctx.config.journal_dir
        if args["target_dir"]:
            target_dir = Path(args["target_dir"]).expanduser()
        else:
            target_dir = ctx.config.backup_dir

        archive = backup_journal(path, target_dir)
        return Outcome(f"Journal backup written to {archive}")
