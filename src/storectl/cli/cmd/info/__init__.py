"""``storectl info`` — version and environment diagnostics."""

from __future__ import annotations

from storectl.cli.cmd.info.doctor import DoctorCommand
from storectl.cli.cmd.info.version import VersionCommand
from storectl.core.service import Service

SERVICE = Service(
    name="info",
    description="Version and environment diagnostics",
    commands=(
        VersionCommand(),
        DoctorCommand(),
    ),
)
