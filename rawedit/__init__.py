"""Public package surface for rawedit.

Exports ``main`` for programmatic CLI invocation.
Most implementation lives in submodules under ``rawedit``.
"""

from __future__ import annotations

import logging

__version__ = "0.1.0"

# Raw mode owns the terminal; records stay silent unless a log file is configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["__version__", "main"]
