"""Exception types raised by the terminal editor core.

Only the CLI catches these; everything below it lets them propagate so the
raw-mode guard can restore the terminal on the way out.
"""

from __future__ import annotations


class RaweditError(Exception):
    """Base class for fatal editor errors."""


class TerminalConfigError(RaweditError):
    """Terminal attributes or geometry could not be read or applied."""


class TerminalIOError(RaweditError, OSError):
    """A read or write on the terminal failed for a reason other than timeout."""
