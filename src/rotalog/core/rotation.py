from __future__ import annotations

"""
Rotation Controller.

Owns the active log file handle, its byte count, the size limit and the
retention count. Every write runs as a single critical section: size check,
optional rotation (rename to a sequenced archive, reopen, prune), append and
counter update. No caller can observe the handle or counter mid-rotation.
"""

import logging
import os
import threading
from typing import BinaryIO, List, Optional

from rotalog.core.sinks import ByteSink
from rotalog.domain.errors import ClosedError, ConfigurationError, SinkIOError
from rotalog.infra.fs import archive_name, ensure_parent_dir, list_archives, remove_file

logger = logging.getLogger(__name__)


def _check_count(value: int, field: str) -> int:
    """Reject anything that is not a non-negative int."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field} must be an integer, received {type(value).__name__}.")
    if value < 0:
        raise ConfigurationError(f"{field} must be >= 0, received {value}.")
    return value


class RotatingFileSink(ByteSink):
    """
    File sink enforcing size-based rotation and count-based retention.

    The active path is stable across rotations. Archives are siblings named
    ``<active>.<sequence>`` with a monotonically increasing sequence, and are
    tracked most-recent-first. Archives left by a previous process are
    adopted at construction so retention spans restarts.
    """

    def __init__(self, path: str, *, size_limit: int = 0, max_files: int = 0) -> None:
        """
        Open (or create) the active file and seed the byte count from its size.

        Args:
            path: Active log file path.
            size_limit: Rotation threshold in bytes (0 disables rotation).
            max_files: Archives to retain (0 disables pruning).

        Raises:
            ConfigurationError: Negative or non-integer limits.
            SinkIOError: If the active file cannot be opened.
        """
        self._size_limit = _check_count(size_limit, "size_limit")
        self._max_files = _check_count(max_files, "max_files")
        self._path = os.path.abspath(path)
        self._lock = threading.Lock()
        self._closed = False

        discovered = list_archives(self._path)
        self._archives: List[str] = [p for _, p in discovered]
        self._sequence = discovered[0][0] if discovered else 0

        try:
            ensure_parent_dir(self._path)
        except OSError as e:
            raise SinkIOError(f"Cannot create log directory for '{self._path}': {e}") from e

        self._handle: Optional[BinaryIO] = None
        self._written = 0
        self._open_active()

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def written_bytes(self) -> int:
        with self._lock:
            return self._written

    @property
    def size_limit(self) -> int:
        return self._size_limit

    @property
    def max_files(self) -> int:
        return self._max_files

    @property
    def archives(self) -> List[str]:
        """Archive paths produced by rotations, most recent first."""
        with self._lock:
            return list(self._archives)

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------

    def set_size_limit(self, size_limit: int) -> None:
        """Update the rotation threshold. Applies from the next write."""
        value = _check_count(size_limit, "size_limit")
        with self._lock:
            if self._closed:
                raise ClosedError("rotating file sink")
            self._size_limit = value

    def set_max_files(self, max_files: int) -> None:
        """Update the retention count. Applies from the next rotation."""
        value = _check_count(max_files, "max_files")
        with self._lock:
            if self._closed:
                raise ClosedError("rotating file sink")
            self._max_files = value

    # -------------------------------------------------------------------------
    # WRITE PATH
    # -------------------------------------------------------------------------

    def write(self, data: bytes) -> int:
        """
        Append one line, rotating first if it would push the file past the limit.

        An empty file is never rotated, so a line larger than the limit is
        still written in full and the rotation happens before the next line.
        If the rotation fails the line is still appended to whichever file is
        open and the rotation error is raised afterwards.

        Args:
            data: Encoded, newline-terminated line.

        Returns:
            int: Number of bytes appended.

        Raises:
            ClosedError: If the sink is closed (nothing is written).
            SinkIOError: Rotation, open or append failure.
        """
        with self._lock:
            if self._closed:
                raise ClosedError("rotating file sink")

            rotation_error: Optional[SinkIOError] = None
            if self._should_rotate(len(data)):
                try:
                    self._rotate()
                except SinkIOError as e:
                    rotation_error = e

            n = self._append(data)

            if rotation_error is not None:
                raise rotation_error
            return n

    def rotate(self) -> bool:
        """
        Force a rotation outside the size policy.

        Returns:
            bool: True if a rotation happened (an empty file is left alone).
        """
        with self._lock:
            if self._closed:
                raise ClosedError("rotating file sink")
            if self._written == 0:
                return False
            self._rotate()
            return True

    def close(self) -> None:
        """Close the active handle. Idempotent; later writes raise ClosedError."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            handle, self._handle = self._handle, None
            if handle is not None:
                try:
                    handle.close()
                except OSError as e:
                    raise SinkIOError(f"Failed to close '{self._path}': {e}") from e

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS (caller holds the lock)
    # -------------------------------------------------------------------------

    def _should_rotate(self, incoming: int) -> bool:
        return (
            self._size_limit > 0
            and self._written > 0
            and self._written + incoming > self._size_limit
        )

    def _open_active(self) -> None:
        """Open the active path for append and resync the byte count."""
        try:
            # unbuffered, so a failed write leaves no tail to replay later
            handle = open(self._path, "ab", buffering=0)
        except OSError as e:
            raise SinkIOError(f"Cannot open log file '{self._path}': {e}") from e
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as e:
            handle.close()
            raise SinkIOError(f"Cannot stat log file '{self._path}': {e}") from e
        self._handle = handle
        self._written = size

    def _append(self, data: bytes) -> int:
        if self._handle is None:
            # a failed rotation or write left no file open
            self._open_active()
        view = memoryview(data)
        try:
            while view:
                n = self._handle.write(view)
                view = view[n:]
        except OSError as e:
            self._resync_after_failed_write()
            raise SinkIOError(f"Write to '{self._path}' failed: {e}") from e
        self._written += len(data)
        return len(data)

    def _resync_after_failed_write(self) -> None:
        """Drop the handle and reopen so the count matches what reached disk."""
        handle, self._handle = self._handle, None
        try:
            handle.close()
        except OSError as e:
            logger.warning(f"Error closing '{self._path}' after failed write: {e}")
        try:
            self._open_active()
        except SinkIOError as e:
            # the next write retries the open
            logger.warning(f"Cannot reopen '{self._path}' after failed write: {e}")

    def _rotate(self) -> None:
        """Archive the active file, open a fresh one and prune old archives."""
        target = archive_name(self._path, self._sequence + 1)

        if self._handle is not None:
            try:
                self._handle.close()
            except OSError as e:
                logger.warning(f"Error closing '{self._path}' before rotation: {e}")
            self._handle = None

        try:
            os.replace(self._path, target)
        except OSError as e:
            # keep logging into the current file
            self._open_active()
            raise SinkIOError(f"Rotation of '{self._path}' to '{target}' failed: {e}") from e

        self._sequence += 1
        self._archives.insert(0, target)
        self._written = 0
        logger.debug(f"Rotated '{self._path}' to '{target}'")

        self._open_active()
        self._prune()

    def _prune(self) -> None:
        """Delete the oldest archives until the retention bound holds."""
        if self._max_files <= 0:
            return
        while len(self._archives) > self._max_files:
            oldest = self._archives[-1]
            try:
                if not remove_file(oldest):
                    logger.debug(f"Archive already gone: {oldest}")
            except OSError as e:
                raise SinkIOError(f"Failed to prune archive '{oldest}': {e}") from e
            self._archives.pop()
            logger.debug(f"Pruned archive {oldest}")
