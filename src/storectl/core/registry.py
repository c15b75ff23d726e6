"""Process-wide table of services, built once at startup.

The registry is populated during a single-threaded startup phase and
then frozen.  It is passed explicitly to the dispatcher rather than
living in a module global, so tests can build isolated registries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, ValuesView

from storectl.core.flags import build_parser
from storectl.core.service import NAME_PATTERN, Service
from storectl.exceptions import (
    DuplicateCommandError,
    DuplicateServiceError,
    EmptyServiceError,
    InvalidNameError,
    RegistrationError,
    UnknownServiceError,
)

logger = logging.getLogger(__name__)


class Registry:
    """Insertion-ordered mapping of service name to :class:`Service`."""

    def __init__(self) -> None:
        self._services: dict[str, Service] = {}
        self._frozen: bool = False

    @classmethod
    def from_services(cls, services: Iterable[Service]) -> Registry:
        """Register every service in declaration order, then freeze."""
        registry = cls()
        for service in services:
            registry.register(service)
        registry.freeze()
        return registry

    # ------------------------------------------------------------------
    # Startup phase
    # ------------------------------------------------------------------

    def register(self, service: Service) -> None:
        """Add *service* to the registry.

        Raises
        ------
        InvalidNameError
            If the service or one of its commands has an invalid name,
            or the service description is empty.
        DuplicateServiceError
            If a service with the same name is already registered.  The
            first registration is kept.
        EmptyServiceError
            If the service declares no commands.
        DuplicateCommandError
            If two commands of the service share a name.
        InvalidNameError
            If a command's flag schema cannot be turned into a parser.
        RegistrationError
            If the registry has already been frozen.
        """
        if self._frozen:
            raise RegistrationError(
                f"Cannot register service '{service.name}': registry is frozen.",
            )
        if not NAME_PATTERN.match(service.name):
            raise InvalidNameError(
                f"Invalid service name {service.name!r}; "
                f"expected {NAME_PATTERN.pattern}.",
            )
        if not service.description.strip():
            raise InvalidNameError(
                f"Service '{service.name}' must have a description.",
            )
        if service.name in self._services:
            raise DuplicateServiceError(
                f"Service '{service.name}' is already registered.",
            )
        if not service.commands:
            raise EmptyServiceError(
                f"Service '{service.name}' declares no commands.",
            )

        seen: set[str] = set()
        for command in service.commands:
            if not NAME_PATTERN.match(command.name):
                raise InvalidNameError(
                    f"Invalid command name {command.name!r} in service "
                    f"'{service.name}'; expected {NAME_PATTERN.pattern}.",
                )
            if command.name in seen:
                raise DuplicateCommandError(
                    f"Service '{service.name}' declares command "
                    f"'{command.name}' more than once.",
                )
            seen.add(command.name)
            build_parser(f"storectl {service.name} {command.name}", command.flag_schema())

        self._services[service.name] = service
        logger.debug(
            "registered service %s with commands %s",
            service.name,
            ", ".join(service.command_names()),
        )

    def freeze(self) -> None:
        """End the startup phase; later :meth:`register` calls fail."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> Service:
        """Return the service registered as *name*.

        Raises
        ------
        UnknownServiceError
            If no service has that name.
        """
        try:
            return self._services[name]
        except KeyError:
            raise UnknownServiceError(
                f"Unknown service '{name}'.",
                hint="Run 'storectl --help' to list available services.",
            ) from None

    def list_all(self) -> ValuesView[Service]:
        """Return a live view of all services in registration order.

        The view is lazy and can be iterated any number of times.
        """
        return self._services.values()

    def __contains__(self, name: object) -> bool:
        return name in self._services

    def __len__(self) -> int:
        return len(self._services)
