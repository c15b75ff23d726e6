"""Service declarations shipped with storectl.

Each subpackage exposes a module-level ``SERVICE``.  :data:`SERVICES`
fixes their registration order, which is also the order shown in
global usage.
"""

from __future__ import annotations

from storectl.cli.cmd import info, journal
from storectl.core.service import Service

SERVICES: tuple[Service, ...] = (
    journal.SERVICE,
    info.SERVICE,
)
