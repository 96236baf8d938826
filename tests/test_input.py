"""Regression tests for raw-key decoding.

Covers the escape-sequence state table, Ctrl-Q precedence, timeout retries,
and the file-descriptor byte source.
"""

from __future__ import annotations

import os
import unittest

from rawedit.errors import TerminalIOError
from rawedit.input import DecoderState, InputDecoder, KeyEvent, ctrl_chord, step
from rawedit.streams import FdByteSource


class _ScriptedSource:
    """Replays bytes, with ``None`` standing for a read that timed out."""

    def __init__(self, script: list[int | bytes | None]) -> None:
        self.script: list[int | None] = []
        for item in script:
            if isinstance(item, bytes):
                self.script.extend(item)
            else:
                self.script.append(item)
        self.reads = 0

    def read_byte(self, timeout_ms: int = 100) -> int | None:
        self.reads += 1
        if not self.script:
            raise AssertionError("decoder read past the end of the script")
        return self.script.pop(0)


class StepTableTests(unittest.TestCase):
    def test_transition_table(self) -> None:
        idle, esc, bracket = DecoderState.IDLE, DecoderState.SAW_ESCAPE, DecoderState.SAW_BRACKET
        cases = [
            (idle, 0x11, idle, KeyEvent.QUIT),
            (idle, 0x1B, esc, None),
            (idle, ord("a"), idle, None),
            (esc, ord("["), bracket, None),
            (esc, ord("x"), idle, None),
            (bracket, ord("A"), idle, KeyEvent.MOVE_UP),
            (bracket, ord("B"), idle, KeyEvent.MOVE_DOWN),
            (bracket, ord("C"), idle, KeyEvent.MOVE_RIGHT),
            (bracket, ord("D"), idle, KeyEvent.MOVE_LEFT),
            (bracket, ord("Z"), idle, None),
        ]
        for state, byte, expected_state, expected_event in cases:
            with self.subTest(state=state, byte=byte):
                self.assertEqual(step(state, byte), (expected_state, expected_event))

    def test_ctrl_q_quits_from_every_state(self) -> None:
        for state in DecoderState:
            with self.subTest(state=state):
                self.assertEqual(step(state, 0x11), (DecoderState.IDLE, KeyEvent.QUIT))

    def test_ctrl_chord_masks_to_low_five_bits(self) -> None:
        self.assertEqual(ctrl_chord("q"), 0x11)
        self.assertEqual(ctrl_chord("Q"), 0x11)
        self.assertEqual(ctrl_chord("["), 0x1B)


class DecodeTests(unittest.TestCase):
    def test_arrow_sequence_decodes_to_one_event_in_three_bytes(self) -> None:
        decoder = InputDecoder(_ScriptedSource([b"\x1b[A"]))

        self.assertEqual(decoder.decode(), KeyEvent.MOVE_UP)
        self.assertEqual(decoder.bytes_consumed, 3)
        self.assertIs(decoder.state, DecoderState.IDLE)

    def test_unrecognized_sequence_consumes_three_bytes_without_event(self) -> None:
        decoder = InputDecoder(_ScriptedSource([b"\x1b[Z"]))

        events = [decoder.feed(byte) for byte in b"\x1b[Z"]
        self.assertEqual(events, [None, None, None])
        self.assertEqual(decoder.bytes_consumed, 3)
        self.assertIs(decoder.state, DecoderState.IDLE)

    def test_dropped_sequence_is_followed_by_next_event(self) -> None:
        decoder = InputDecoder(_ScriptedSource([b"\x1b[Zx\x1bq\x1b[D"]))

        self.assertEqual(decoder.decode(), KeyEvent.MOVE_LEFT)
        self.assertEqual(decoder.bytes_consumed, 9)

    def test_quit_mid_sequence_aborts_it(self) -> None:
        source = _ScriptedSource([b"\x1b[\x11A"])
        decoder = InputDecoder(source)

        self.assertEqual(decoder.decode(), KeyEvent.QUIT)
        self.assertIs(decoder.state, DecoderState.IDLE)
        self.assertEqual(source.script, [ord("A")])

    def test_timeouts_are_retried_without_spurious_events(self) -> None:
        source = _ScriptedSource([None, None, None, None, None, 0x11])
        decoder = InputDecoder(source)

        self.assertEqual(decoder.decode(), KeyEvent.QUIT)
        self.assertEqual(source.reads, 6)
        self.assertEqual(decoder.bytes_consumed, 1)
        self.assertEqual(source.script, [])

    def test_timeout_inside_sequence_keeps_decoder_state(self) -> None:
        decoder = InputDecoder(_ScriptedSource([0x1B, None, ord("["), None, None, ord("C")]))

        self.assertEqual(decoder.decode(), KeyEvent.MOVE_RIGHT)
        self.assertEqual(decoder.bytes_consumed, 3)

    def test_read_errors_propagate(self) -> None:
        class _BrokenSource:
            def read_byte(self, timeout_ms: int = 100) -> int | None:
                raise TerminalIOError("read failed")

        decoder = InputDecoder(_BrokenSource())
        with self.assertRaises(TerminalIOError):
            decoder.decode()


class FdByteSourceTests(unittest.TestCase):
    def test_reads_single_bytes_from_pipe(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b[B")
            source = FdByteSource(read_fd)
            decoder = InputDecoder(source, timeout_ms=20)
            event = decoder.decode()
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(event, KeyEvent.MOVE_DOWN)

    def test_returns_none_when_no_data_arrives(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            byte = FdByteSource(read_fd).read_byte(timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertIsNone(byte)

    def test_returns_none_on_empty_read(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            byte = FdByteSource(read_fd).read_byte(timeout_ms=10)
        finally:
            os.close(read_fd)

        self.assertIsNone(byte)

    def test_closed_fd_raises_terminal_io_error(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(read_fd)
        os.close(write_fd)

        with self.assertRaises(TerminalIOError):
            FdByteSource(read_fd).read_byte(timeout_ms=10)


if __name__ == "__main__":
    unittest.main()
