"""Logging setup for the storectl process.

Modules log through ``logging.getLogger(__name__)``; this module only
decides where records go.  Rich is used when installed, otherwise a
plain stderr handler keeps ``--debug`` usable.
"""

from __future__ import annotations

import logging
import os

DEBUG_ENV = "STORECTL_DEBUG"


def debug_requested(flag: bool) -> bool:
    """Return ``True`` if ``--debug`` was given or ``STORECTL_DEBUG`` is truthy."""
    if flag:
        return True
    return os.environ.get(DEBUG_ENV, "").lower() in {"1", "true", "yes", "on"}


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s"),
        )
        return handler

    return RichHandler(console=Console(stderr=True), show_path=False)


def configure_logging(debug: bool = False) -> None:
    """Attach a single handler to the ``storectl`` logger.

    Calling it again replaces the previous handler, so repeated
    in-process invocations (tests, embedding) do not duplicate output.
    """
    root = logging.getLogger("storectl")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(_build_handler())
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
