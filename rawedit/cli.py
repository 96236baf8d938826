"""Command-line front door for rawedit.

Parses the few CLI options, wires the terminal session, decoder and renderer
together, and maps fatal errors to a diagnostic and a non-zero exit status.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import resolve_config
from .editor import EditorLoop
from .errors import RaweditError
from .input import InputDecoder
from .log import configure_logging
from .render import FrameRenderer
from .streams import FdByteSink, FdByteSource
from .terminal import TTY_PATH, TerminalSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rawedit",
        description="Full-screen raw-mode terminal editor skeleton. Arrow keys move, Ctrl-Q quits.",
    )
    banner_group = parser.add_mutually_exclusive_group()
    banner_group.add_argument("--banner", default=None, help="Text shown centered a third of the way down.")
    banner_group.add_argument("--no-banner", action="store_true", help="Do not draw the banner row.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument("--tty", default=TTY_PATH, help=argparse.SUPPRESS)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_editor(tty_path: str, banner: str | None) -> None:
    """Open the terminal, run the editor loop, and always close the device."""
    session = TerminalSession.open(tty_path)
    try:
        loop = EditorLoop(
            session,
            InputDecoder(FdByteSource(session.fd)),
            FrameRenderer(FdByteSink(session.fd)),
            banner=banner,
        )
        loop.run()
    finally:
        session.close()


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the editor.

    Returns ``0`` after a Ctrl-Q quit and ``1`` after any terminal
    configuration or I/O failure; the terminal has been restored before the
    diagnostic is printed.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_file)
    except OSError as exc:
        parser.error(f"cannot open log file {args.log_file}: {exc.strerror or exc}")
    config = resolve_config(banner=args.banner, no_banner=args.no_banner)
    try:
        run_editor(args.tty, config.banner)
    except RaweditError as exc:
        logger.error("fatal: %s", exc)
        print(f"rawedit: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
