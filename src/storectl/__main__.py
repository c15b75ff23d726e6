"""Allow ``python -m storectl`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m storectl`` behaves identically to the ``storectl``
console script.
"""

from __future__ import annotations

from storectl.cli.app import cli

if __name__ == "__main__":
    cli()
