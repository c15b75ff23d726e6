"""Custom exception hierarchy for storectl.

All exceptions that cross layer boundaries must inherit from
:class:`StorectlError`.  Raw ``OSError`` and third-party exceptions must
NEVER propagate beyond the infrastructure layer; they must be caught
and re-raised as a typed subclass defined here.

Hierarchy
---------
StorectlError
├── RegistrationError
│   ├── DuplicateServiceError
│   ├── DuplicateCommandError
│   ├── EmptyServiceError
│   └── InvalidNameError
├── ResolutionError
│   ├── UnknownServiceError
│   ├── UnknownCommandError
│   └── FlagParseError
├── CommandRuntimeError
│   └── JournalError
├── ConfigError
└── MissingDependencyError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storectl.core.protocols import Command
    from storectl.core.service import Service


class StorectlError(Exception):
    """Base exception for all storectl errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Registration (startup, programmer error) ------------------------------

class RegistrationError(StorectlError):
    """Raised when the command registry cannot be assembled."""


class DuplicateServiceError(RegistrationError):
    """Raised when a service name is registered twice."""


class DuplicateCommandError(RegistrationError):
    """Raised when two commands of one service share a name."""


class EmptyServiceError(RegistrationError):
    """Raised when a service declares no commands."""


class InvalidNameError(RegistrationError):
    """Raised when a service or command name breaks the naming rules."""


# --- Resolution (user error) -----------------------------------------------

class ResolutionError(StorectlError):
    """Raised while turning an argument vector into a runnable command.

    ``service`` and ``command`` record the deepest level that *was*
    resolved before the failure, so the dispatcher can print usage for
    exactly that level.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        service: Service | None = None,
        command: Command | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.service: Service | None = service
        self.command: Command | None = command


class UnknownServiceError(ResolutionError):
    """Raised when the service token is missing or not registered."""


class UnknownCommandError(ResolutionError):
    """Raised when the command token is missing or not in the service."""


class FlagParseError(ResolutionError):
    """Raised for malformed, missing or unrecognised flags."""


# --- Command execution -----------------------------------------------------

class CommandRuntimeError(StorectlError):
    """Raised by a command's ``run`` when the operation fails.

    The underlying exception, if any, is chained with ``raise ... from``
    and exposed as :attr:`cause`.
    """

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class JournalError(CommandRuntimeError):
    """Raised when a journal folder cannot be formatted or backed up."""


# --- Environment / tooling -------------------------------------------------

class ConfigError(StorectlError):
    """Raised when the configuration file or environment is invalid."""


class MissingDependencyError(StorectlError):
    """Raised when an optional runtime dependency is not available."""
