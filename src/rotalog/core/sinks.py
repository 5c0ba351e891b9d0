from __future__ import annotations

"""
Byte Sinks.

A sink is "somewhere bytes go": an append-only destination with an
explicit closed state. The console sink is a pass-through to a standard
stream; the rotating file sink lives in rotalog.core.rotation.
"""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from rotalog.domain.errors import ClosedError, SinkIOError


class ByteSink(ABC):
    """Uniform append-only contract shared by every destination."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Append raw bytes to the destination.

        Returns:
            int: Number of bytes written.

        Raises:
            ClosedError: If the sink has been closed.
            SinkIOError: If the destination rejects the write.
        """

    @abstractmethod
    def close(self) -> None:
        """Flush and release the destination. Calling it twice is a no-op."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once close() has been called."""


class ConsoleSink(ByteSink):
    """
    Unrotated pass-through to a text stream (stderr by default).

    The stream itself serializes concurrent writers, so no extra lock is
    taken here. Closing the sink never closes the process stream.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stderr
        self._closed = False

    @property
    def stream(self) -> TextIO:
        return self._stream

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> int:
        if self._closed:
            raise ClosedError("console sink")
        try:
            self._stream.write(data.decode("utf-8", errors="replace"))
            self._stream.flush()
        except OSError as e:
            raise SinkIOError(f"Console write failed: {e}") from e
        return len(data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._stream.flush()
        except (OSError, ValueError):
            # stream already closed by its owner
            pass
