"""Value types shared by the renderer and the editor loop."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ScreenSize:
    rows: int
    cols: int


@dataclass(frozen=True)
class CursorPosition:
    x: int = 0
    y: int = 0

    def moved(self, dx: int, dy: int, size: ScreenSize) -> "CursorPosition":
        """Return the position shifted by ``(dx, dy)`` and clamped inside ``size``."""
        return CursorPosition(
            x=max(0, min(size.cols - 1, self.x + dx)),
            y=max(0, min(size.rows - 1, self.y + dy)),
        )


class LoopState(Enum):
    RUNNING = "running"
    QUITTING = "quitting"
