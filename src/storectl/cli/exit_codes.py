"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit: command completed without error, or help was shown."""

GENERAL_ERROR: int = 1
"""A command failed at runtime, or another known StorectlError was caught."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

UNKNOWN_SERVICE: int = 3
"""The service token was missing or names no registered service."""

UNKNOWN_COMMAND: int = 4
"""The command token was missing or names no command of the service."""

FLAG_PARSE_ERROR: int = 5
"""Flags or positional arguments did not match the command's schema."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
