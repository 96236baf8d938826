"""Main interactive loop for the editor.

Each tick renders the current state, blocks for one decoded key event, and
applies it. The terminal session guard wraps the whole run so raw mode is
undone on quit and on every propagated error.
"""

from __future__ import annotations

import logging

from .input import InputDecoder, KeyEvent
from .render import FrameRenderer
from .state import CursorPosition, LoopState, ScreenSize
from .terminal import TerminalSession

logger = logging.getLogger(__name__)

MOVE_DELTAS: dict[KeyEvent, tuple[int, int]] = {
    KeyEvent.MOVE_UP: (0, -1),
    KeyEvent.MOVE_DOWN: (0, 1),
    KeyEvent.MOVE_LEFT: (-1, 0),
    KeyEvent.MOVE_RIGHT: (1, 0),
}


class EditorLoop:
    """Drive render -> decode -> apply until a quit event arrives."""

    def __init__(
        self,
        session: TerminalSession,
        decoder: InputDecoder,
        renderer: FrameRenderer,
        banner: str | None = None,
    ) -> None:
        self.session = session
        self.decoder = decoder
        self.renderer = renderer
        self.banner = banner
        self.size: ScreenSize | None = None
        self.cursor = CursorPosition()
        self.state = LoopState.RUNNING

    def apply(self, event: KeyEvent) -> LoopState:
        """Apply one key event to the cursor or loop state."""
        if self.state is LoopState.QUITTING:
            return self.state
        if event is KeyEvent.QUIT:
            logger.debug("quit requested")
            self.state = LoopState.QUITTING
            return self.state
        delta = MOVE_DELTAS.get(event)
        if delta is not None and self.size is not None:
            self.cursor = self.cursor.moved(delta[0], delta[1], self.size)
        return self.state

    def tick(self) -> LoopState:
        """Render and flush one frame, then wait for and apply one event."""
        if self.size is None:
            self.size = self.session.query_size()
        self.renderer.render(self.size, self.cursor, self.banner)
        self.renderer.flush()
        return self.apply(self.decoder.decode())

    def run(self) -> None:
        """Run until quit; terminal attributes are restored on every exit path."""
        with self.session.raw_mode():
            if self.size is None:
                self.size = self.session.query_size()
            while self.state is LoopState.RUNNING:
                self.tick()
            self.renderer.render_final()
            self.renderer.flush()
        logger.debug("editor loop finished")
