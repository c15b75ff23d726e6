"""storectl — command-line administration for a clustered storage system.

Commands are grouped into services and resolved through a small
registry/dispatch core.
"""

from storectl.version import __version__

__all__: list[str] = ["__version__"]
