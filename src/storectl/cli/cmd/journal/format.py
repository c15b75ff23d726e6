"""``storectl journal format`` — wipe and recreate the local journal folder."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from storectl.cli.prompts import confirm
from storectl.core.models import CommandContext, FlagSpec, Outcome, ParsedArgs
from storectl.exceptions import CommandRuntimeError
from storectl.infra.journal_store import format_journal

logger = logging.getLogger(__name__)


class FormatCommand:
    name = "format"
    description = "Format the local journal folder (deletes all journal data)"

    def flag_schema(self) -> Sequence[FlagSpec]:
        return (
            FlagSpec("--force", "Skip the confirmation prompt.", short="-f"),
            FlagSpec(
                "--path",
                "Journal folder to format instead of the configured one.",
                takes_value=True,
                metavar="PATH",
            ),
        )

    def run(self, ctx: CommandContext, args: ParsedArgs) -> Outcome:
        path = Path(args["path"]).expanduser() if args["path"] else ctx.config.journal_dir

        if not args["force"]:
            question = f"Format journal at {path}? All journal data will be deleted."
            if not confirm(question):
                raise CommandRuntimeError(
                    "Journal format cancelled.",
                    hint="Pass --force to format without confirmation.",
                )

        logger.debug("formatting journal at %s", path)
        before = format_journal(path)
        if before.exists:
            return Outcome(f"Formatted journal at {path} ({before.entries} entries removed).")
        return Outcome(f"Formatted journal at {path} (new folder created).")
