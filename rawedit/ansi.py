"""VT100/ANSI control sequences written by the renderer.

Sequences are kept as ``bytes`` because frames are assembled in a byte buffer.
See https://vt100.net/docs/vt100-ug/chapter3.html for the escape grammar.
"""

from __future__ import annotations

ESC = 0x1B
CSI = b"\x1b["

ERASE_DISPLAY = CSI + b"2J"
CURSOR_HOME = CSI + b"H"
ERASE_LINE_RIGHT = CSI + b"K"
HIDE_CURSOR = CSI + b"?25l"
SHOW_CURSOR = CSI + b"?25h"
ROW_SEPARATOR = b"\r\n"


def cursor_position(row: int, col: int) -> bytes:
    """Return ``ESC [ row ; col H`` for 1-indexed terminal coordinates."""
    return b"%s%d;%dH" % (CSI, row, col)
