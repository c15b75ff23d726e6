"""CLI layer — argument dispatch, user interaction, and error boundary.

This package is the outermost layer of the application.  It may import
from ``core``, ``infra`` and the top-level ambient modules, but no other
layer may import from ``cli``.  Concrete services live in
:mod:`storectl.cli.cmd`.
"""
