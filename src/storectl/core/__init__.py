"""Core layer — command contracts, service declarations and the registry.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from storectl.core.flags import parse_flags, wants_help
from storectl.core.models import CommandContext, FlagSpec, Outcome, ParsedArgs
from storectl.core.protocols import Command
from storectl.core.registry import Registry
from storectl.core.service import Service

__all__: list[str] = [
    "Command",
    "CommandContext",
    "FlagSpec",
    "Outcome",
    "ParsedArgs",
    "Registry",
    "Service",
    "parse_flags",
    "wants_help",
]
