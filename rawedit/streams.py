"""Byte endpoints the editor reads keys from and writes frames to.

The core only depends on the ``ByteSource``/``ByteSink`` protocols, so a tty
fd, a pipe, or an in-memory double can be swapped in freely.
"""

from __future__ import annotations

import os
import select
from typing import Protocol

from .errors import TerminalIOError

READ_TIMEOUT_MS = 100


class ByteSource(Protocol):
    def read_byte(self, timeout_ms: int = READ_TIMEOUT_MS) -> int | None:
        """Return one byte, or ``None`` when nothing arrived within ``timeout_ms``."""
        ...


class ByteSink(Protocol):
    def write(self, data: bytes) -> None:
        """Write ``data`` completely."""
        ...


class FdByteSource:
    """Read single bytes from a file descriptor with a bounded wait."""

    def __init__(self, fd: int) -> None:
        self.fd = fd

    def read_byte(self, timeout_ms: int = READ_TIMEOUT_MS) -> int | None:
        """Read one byte from ``fd``.

        Returns ``None`` when ``select`` times out or the read comes back empty,
        which is what a raw-mode tty with ``VMIN=0``/``VTIME=1`` does after
        100 ms without input. Any other failure raises ``TerminalIOError``.
        """
        try:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
            ch = os.read(self.fd, 1)
        except (OSError, ValueError) as exc:
            raise TerminalIOError(f"read from fd {self.fd} failed: {exc}") from exc
        if not ch:
            return None
        return ch[0]


class FdByteSink:
    """Write byte strings to a file descriptor."""

    def __init__(self, fd: int) -> None:
        self.fd = fd

    def write(self, data: bytes) -> None:
        """Write all of ``data``, retrying short writes."""
        view = memoryview(data)
        try:
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
        except OSError as exc:
            raise TerminalIOError(f"write to fd {self.fd} failed: {exc}") from exc
