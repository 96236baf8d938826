"""Terminal raw-mode session for the editor.

Owns the tty file descriptor, captures and restores its attributes, and
answers the one geometry query the editor makes at startup.
"""

from __future__ import annotations

import contextlib
import copy
import fcntl
import logging
import os
import struct
import termios
import tty
from collections.abc import Iterator

from .errors import TerminalConfigError
from .state import ScreenSize

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"
RAW_READ_MIN_BYTES = 0
# VTIME counts tenths of a second.
RAW_READ_TIMEOUT_DECISECONDS = 1

TermAttributes = list


def derive_raw_attributes(attrs: TermAttributes) -> TermAttributes:
    """Return a raw-mode copy of ``attrs`` without mutating the original."""
    raw = copy.deepcopy(attrs)
    raw[tty.CFLAG] |= termios.CS8
    # No break-to-SIGINT, CR->NL, parity check, 8th-bit strip or Ctrl-S/Ctrl-Q flow control.
    raw[tty.IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    # No echo, line buffering, Ctrl-V processing or Ctrl-C/Ctrl-Z signals.
    raw[tty.LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    # Keep "\n" as "\n"; frames emit explicit "\r\n".
    raw[tty.OFLAG] &= ~termios.OPOST
    raw[tty.CC][termios.VMIN] = RAW_READ_MIN_BYTES
    raw[tty.CC][termios.VTIME] = RAW_READ_TIMEOUT_DECISECONDS
    return raw


class TerminalSession:
    """Exclusive raw-mode session on one terminal file descriptor."""

    def __init__(self, fd: int, *, owns_fd: bool = False) -> None:
        self.fd = fd
        self._owns_fd = owns_fd
        self._saved_attrs: TermAttributes | None = None
        self._raw_attrs: TermAttributes | None = None

    @classmethod
    def open(cls, path: str = TTY_PATH) -> "TerminalSession":
        """Open the controlling terminal read/write and wrap it in a session."""
        try:
            fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
        except OSError as exc:
            raise TerminalConfigError(f"cannot open terminal {path}: {exc.strerror or exc}") from exc
        logger.debug("opened %s as fd %d", path, fd)
        return cls(fd, owns_fd=True)

    @property
    def active(self) -> bool:
        return self._saved_attrs is not None

    @property
    def saved_attributes(self) -> TermAttributes | None:
        return self._saved_attrs

    @property
    def raw_attributes(self) -> TermAttributes | None:
        return self._raw_attrs

    def enter(self) -> None:
        """Capture the current attributes and switch the device to raw mode."""
        if self._saved_attrs is not None:
            raise TerminalConfigError("terminal session already entered")
        try:
            saved = termios.tcgetattr(self.fd)
        except (termios.error, OSError) as exc:
            raise TerminalConfigError(f"cannot read terminal attributes: {exc}") from exc
        raw = derive_raw_attributes(saved)
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        except (termios.error, OSError) as exc:
            raise TerminalConfigError(f"cannot apply raw terminal attributes: {exc}") from exc
        self._saved_attrs = saved
        self._raw_attrs = raw
        logger.debug("entered raw mode on fd %d", self.fd)

    def exit(self) -> None:
        """Reapply the attributes captured by ``enter``; later calls are no-ops."""
        saved = self._saved_attrs
        if saved is None:
            return
        self._saved_attrs = None
        self._raw_attrs = None
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, saved)
        except (termios.error, OSError) as exc:
            raise TerminalConfigError(f"cannot restore terminal attributes: {exc}") from exc
        logger.debug("restored terminal attributes on fd %d", self.fd)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator["TerminalSession"]:
        """Context manager that keeps the terminal raw for the enclosed block."""
        self.enter()
        try:
            yield self
        finally:
            self.exit()

    def query_size(self) -> ScreenSize:
        """Ask the device for its geometry via ``TIOCGWINSZ``."""
        try:
            packed = fcntl.ioctl(self.fd, termios.TIOCGWINSZ, b"\0" * 8)
        except OSError as exc:
            raise TerminalConfigError(f"cannot query terminal size: {exc}") from exc
        rows, cols, _xpixel, _ypixel = struct.unpack("HHHH", packed)
        if rows <= 0 or cols <= 0:
            raise TerminalConfigError(f"terminal reported degenerate size {rows}x{cols}")
        logger.debug("terminal size is %d rows x %d cols", rows, cols)
        return ScreenSize(rows=rows, cols=cols)

    def close(self) -> None:
        """Close the fd if this session opened it."""
        if not self._owns_fd:
            return
        self._owns_fd = False
        os.close(self.fd)
