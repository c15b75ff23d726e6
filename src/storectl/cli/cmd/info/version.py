"""``storectl info version``."""

from __future__ import annotations

from collections.abc import Sequence

from storectl.core.models import CommandContext, FlagSpec, Outcome, ParsedArgs
from storectl.version import __version__


class VersionCommand:
    name = "version"
    description = "Print the storectl version"

    def flag_schema(self) -> Sequence[FlagSpec]:
        return ()

    def run(self, ctx: CommandContext, args: ParsedArgs) -> Outcome:
        return Outcome(f"storectl {__version__}")
