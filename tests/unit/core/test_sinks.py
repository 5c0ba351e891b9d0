from __future__ import annotations

"""
Unit tests for the Console Sink.

Verifies pass-through writes, the closed state, and I/O error wrapping.
"""

import io
from unittest.mock import MagicMock

import pytest

from rotalog.core.sinks import ConsoleSink
from rotalog.domain.errors import ClosedError, SinkIOError


def test_console_sink_passes_bytes_through() -> None:
    """TC-01: Bytes are decoded and written to the stream unchanged."""
    buf = io.StringIO()
    sink = ConsoleSink(buf)

    n = sink.write("[INF] héllo\n".encode("utf-8"))

    assert buf.getvalue() == "[INF] héllo\n"
    assert n == len("[INF] héllo\n".encode("utf-8"))


def test_console_sink_close_does_not_close_stream() -> None:
    """TC-02: Closing the sink leaves the process stream usable."""
    buf = io.StringIO()
    sink = ConsoleSink(buf)
    sink.close()
    sink.close()

    assert sink.closed is True
    assert buf.closed is False
    with pytest.raises(ClosedError):
        sink.write(b"late\n")
    assert buf.getvalue() == ""


def test_console_sink_wraps_os_errors() -> None:
    """TC-03: Stream failures surface as SinkIOError."""
    stream = MagicMock()
    stream.write.side_effect = BrokenPipeError("pipe closed")
    sink = ConsoleSink(stream)

    with pytest.raises(SinkIOError) as excinfo:
        sink.write(b"x\n")
    assert isinstance(excinfo.value.__cause__, BrokenPipeError)


def test_console_sink_defaults_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    """TC-04: Without an explicit stream the sink writes to stderr."""
    sink = ConsoleSink()
    sink.write(b"to stderr\n")

    captured = capsys.readouterr()
    assert captured.err == "to stderr\n"
    assert captured.out == ""
