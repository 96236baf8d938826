"""Low-level terminal input decoding.

Turns raw bytes into logical key events. Escape-sequence progress lives in an
explicit ``DecoderState`` so a sequence can straddle several reads.
"""

from __future__ import annotations

import logging
from enum import Enum

from .ansi import ESC
from .streams import READ_TIMEOUT_MS, ByteSource

logger = logging.getLogger(__name__)


def ctrl_chord(ch: str) -> int:
    """Return the control byte a terminal sends for Ctrl+``ch``."""
    return ord(ch) & 0x1F


QUIT_BYTE = ctrl_chord("q")
BRACKET_BYTE = ord("[")


class KeyEvent(Enum):
    QUIT = "quit"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_RIGHT = "move_right"
    MOVE_LEFT = "move_left"


class DecoderState(Enum):
    IDLE = "idle"
    SAW_ESCAPE = "saw_escape"
    SAW_BRACKET = "saw_bracket"


ARROW_EVENTS: dict[int, KeyEvent] = {
    ord("A"): KeyEvent.MOVE_UP,
    ord("B"): KeyEvent.MOVE_DOWN,
    ord("C"): KeyEvent.MOVE_RIGHT,
    ord("D"): KeyEvent.MOVE_LEFT,
}


def step(state: DecoderState, byte: int) -> tuple[DecoderState, KeyEvent | None]:
    """Advance the decoder by one byte and return ``(next_state, event)``.

    Ctrl-Q wins over any partial escape sequence. Malformed or unrecognized
    sequences are dropped silently and the decoder falls back to idle.
    """
    if byte == QUIT_BYTE:
        return DecoderState.IDLE, KeyEvent.QUIT
    if state is DecoderState.IDLE:
        if byte == ESC:
            return DecoderState.SAW_ESCAPE, None
        # Plain bytes have no text buffer to land in yet.
        return DecoderState.IDLE, None
    if state is DecoderState.SAW_ESCAPE:
        if byte == BRACKET_BYTE:
            return DecoderState.SAW_BRACKET, None
        return DecoderState.IDLE, None
    return DecoderState.IDLE, ARROW_EVENTS.get(byte)


class InputDecoder:
    """Pull bytes from a ``ByteSource`` until a key event is recognized."""

    def __init__(self, source: ByteSource, timeout_ms: int = READ_TIMEOUT_MS) -> None:
        self.source = source
        self.timeout_ms = timeout_ms
        self.state = DecoderState.IDLE
        self.bytes_consumed = 0

    def read_byte(self) -> int | None:
        return self.source.read_byte(self.timeout_ms)

    def feed(self, byte: int) -> KeyEvent | None:
        """Apply one byte to the decoder state and return any completed event."""
        self.bytes_consumed += 1
        self.state, event = step(self.state, byte)
        return event

    def decode(self) -> KeyEvent:
        """Block until exactly one event is decoded.

        Timeouts are retried without touching the decoder state; read errors
        propagate from the source.
        """
        while True:
            byte = self.read_byte()
            if byte is None:
                continue
            event = self.feed(byte)
            if event is not None:
                logger.debug("decoded %s after %d bytes", event.name, self.bytes_consumed)
                return event
