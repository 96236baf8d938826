"""Frame composition for the full-screen editor view.

Every tick rebuilds one byte buffer holding the whole frame and hands it to
the sink in a single write, so the terminal never shows a half-drawn screen.
"""

from __future__ import annotations

from .ansi import (
    CURSOR_HOME,
    ERASE_DISPLAY,
    ERASE_LINE_RIGHT,
    HIDE_CURSOR,
    ROW_SEPARATOR,
    SHOW_CURSOR,
    cursor_position,
)
from .state import CursorPosition, ScreenSize
from .streams import ByteSink

ROW_MARKER = b"~"


def banner_row(size: ScreenSize) -> int:
    return size.rows // 3


def banner_line(banner: str, cols: int) -> bytes:
    """Return the banner row content, clipped to ``cols`` and centered.

    The left margin is ``(cols - len(banner)) // 2`` columns and, when there
    is any margin at all, its first column keeps the ``~`` row marker.
    """
    text = banner.encode("utf-8", errors="replace")[: max(0, cols)]
    padding = (cols - len(text)) // 2
    out = bytearray()
    if padding > 0:
        out += ROW_MARKER
        padding -= 1
    out += b" " * padding
    out += text
    return bytes(out)


class FrameRenderer:
    """Owns the reusable frame buffer and writes it to ``sink``."""

    def __init__(self, sink: ByteSink) -> None:
        self.sink = sink
        self.buffer = bytearray()

    def render(self, size: ScreenSize, cursor: CursorPosition, banner: str | None = None) -> None:
        """Compose one frame into the buffer without writing it."""
        buf = self.buffer
        buf.clear()
        buf += HIDE_CURSOR
        buf += CURSOR_HOME
        target_row = banner_row(size) if banner else -1
        last_row = size.rows - 1
        for row in range(size.rows):
            if row == target_row:
                buf += banner_line(banner, size.cols)
            else:
                buf += ROW_MARKER
            buf += ERASE_LINE_RIGHT
            if row < last_row:
                buf += ROW_SEPARATOR
        buf += cursor_position(cursor.y + 1, cursor.x + 1)
        buf += SHOW_CURSOR

    def render_final(self) -> None:
        """Compose the exit frame: blank screen with the cursor at the origin."""
        self.buffer.clear()
        self.buffer += ERASE_DISPLAY
        self.buffer += CURSOR_HOME

    def flush(self) -> None:
        """Write the whole buffer in one call, then empty it for the next frame."""
        if not self.buffer:
            return
        self.sink.write(bytes(self.buffer))
        self.buffer.clear()
