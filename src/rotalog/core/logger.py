from __future__ import annotations

"""
Logger Facade.

The only component end users call. Each severity method consults the level
filter, renders the line and hands the bytes to the sink. Fatal calls always
emit and then terminate the process through an injectable exit hook, after
the write has been attempted.
"""

import logging
import os
import sys
from typing import Any, Callable, Optional, TextIO

from rotalog.core.formatter import LineFormatter
from rotalog.core.rotation import RotatingFileSink
from rotalog.core.sinks import ByteSink, ConsoleSink
from rotalog.domain.config import LoggerConfig
from rotalog.domain.errors import ConfigurationError, LoggerError
from rotalog.domain.levels import Level, LevelFilter

logger = logging.getLogger(__name__)

FATAL_EXIT_CODE = 1

ExitHook = Callable[[int], Any]


def _terminate(code: int) -> None:
    """Flush the standard streams and end the process immediately."""
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError, AttributeError):
            pass
    os._exit(code)


class Logger:
    """
    Leveled logger writing formatted lines to a ByteSink.

    Formatting is stateless; serialization of concurrent writers is the
    sink's concern. Errors from the sink propagate to the caller and the
    logger stays usable afterwards.
    """

    def __init__(
            self,
            sink: ByteSink,
            *,
            formatter: Optional[LineFormatter] = None,
            level_filter: Optional[LevelFilter] = None,
            exit_hook: Optional[ExitHook] = None,
    ) -> None:
        self._sink = sink
        self._formatter = formatter or LineFormatter()
        self._filter = level_filter or LevelFilter()
        self._exit_hook: ExitHook = exit_hook or _terminate

    @property
    def sink(self) -> ByteSink:
        return self._sink

    @property
    def level_filter(self) -> LevelFilter:
        return self._filter

    # -------------------------------------------------------------------------
    # SEVERITY API
    # -------------------------------------------------------------------------

    def notice(self, msg: Any, *args: Any) -> None:
        self.log(Level.NOTICE, msg, *args)

    def warn(self, msg: Any, *args: Any) -> None:
        self.log(Level.WARNING, msg, *args)

    warning = warn

    def error(self, msg: Any, *args: Any) -> None:
        self.log(Level.ERROR, msg, *args)

    def debug(self, msg: Any, *args: Any) -> None:
        self.log(Level.DEBUG, msg, *args)

    def trace(self, msg: Any, *args: Any) -> None:
        self.log(Level.TRACE, msg, *args)

    def fatal(self, msg: Any, *args: Any) -> None:
        """
        Record the message, then terminate the process unconditionally.

        A failed write is reported on the diagnostic logger only; it never
        prevents termination.
        """
        try:
            self.log(Level.FATAL, msg, *args)
        except LoggerError as e:
            logger.error(f"Fatal message could not be recorded: {e}")
        finally:
            self._exit_hook(FATAL_EXIT_CODE)

    def log(self, level: Level, msg: Any, *args: Any) -> None:
        """
        Emit a line at the given level if the filter allows it.

        Args:
            level: Severity of the call.
            msg: Message, %-formatted with args when args are given.

        Raises:
            ClosedError: If the logger has been closed.
            SinkIOError: If the destination rejected the line.
        """
        if not self._filter.enabled(level):
            return
        text = str(msg) % args if args else str(msg)
        self._sink.write(self._formatter.format(level, text))

    # -------------------------------------------------------------------------
    # ROTATION SETTINGS & LIFECYCLE
    # -------------------------------------------------------------------------

    def set_size_limit(self, size_limit: int) -> None:
        """Set the rotation threshold in bytes (0 disables rotation)."""
        self._rotating_sink("size limit").set_size_limit(size_limit)

    def set_max_files(self, max_files: int) -> None:
        """Set how many archives to retain (0 disables pruning)."""
        self._rotating_sink("max files").set_max_files(max_files)

    def close(self) -> None:
        self._sink.close()

    @property
    def closed(self) -> bool:
        return self._sink.closed

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _rotating_sink(self, setting: str) -> RotatingFileSink:
        if not isinstance(self._sink, RotatingFileSink):
            raise ConfigurationError(f"Can only set {setting} on a file logger.")
        return self._sink


# -----------------------------------------------------------------------------
# FACTORIES
# -----------------------------------------------------------------------------

def new_std_logger(
        time: bool,
        debug: bool,
        trace: bool,
        colors: bool,
        pid: bool,
        *,
        utc: bool = False,
        stream: Optional[TextIO] = None,
        exit_hook: Optional[ExitHook] = None,
) -> Logger:
    """
    Build a logger writing to a console stream (stderr unless given).

    Args:
        time: Prefix lines with a timestamp.
        debug: Emit debug-level calls.
        trace: Emit trace-level calls.
        colors: Color-code the level tags.
        pid: Prefix lines with the process id.
        utc: Render timestamps in UTC.
        stream: Target text stream.
        exit_hook: Called with the exit code after a fatal message.

    Returns:
        Logger: Console-backed logger.
    """
    return Logger(
        ConsoleSink(stream),
        formatter=LineFormatter(timestamps=time, utc=utc, pid=pid, colors=colors),
        level_filter=LevelFilter(debug=debug, trace=trace),
        exit_hook=exit_hook,
    )


def new_file_logger(
        filename: str,
        time: bool,
        debug: bool,
        trace: bool,
        pid: bool,
        *,
        utc: bool = False,
        size_limit: int = 0,
        max_files: int = 0,
        exit_hook: Optional[ExitHook] = None,
) -> Logger:
    """
    Build a logger appending to a rotation-managed file.

    Args:
        filename: Active log file path.
        time: Prefix lines with a timestamp.
        debug: Emit debug-level calls.
        trace: Emit trace-level calls.
        pid: Prefix lines with the process id.
        utc: Render timestamps in UTC.
        size_limit: Rotation threshold in bytes (0 disables rotation).
        max_files: Archives to retain (0 disables pruning).
        exit_hook: Called with the exit code after a fatal message.

    Returns:
        Logger: File-backed logger.

    Raises:
        ConfigurationError: Negative rotation settings.
        SinkIOError: If the file cannot be opened.
    """
    sink = RotatingFileSink(filename, size_limit=size_limit, max_files=max_files)
    return Logger(
        sink,
        formatter=LineFormatter(timestamps=time, utc=utc, pid=pid),
        level_filter=LevelFilter(debug=debug, trace=trace),
        exit_hook=exit_hook,
    )


def create_logger(
        cfg: LoggerConfig,
        *,
        stream: Optional[TextIO] = None,
        exit_hook: Optional[ExitHook] = None,
) -> Logger:
    """
    Build a logger from a validated LoggerConfig.

    Args:
        cfg: Construction-time configuration.
        stream: Overrides the console stream named by cfg.destination.
        exit_hook: Called with the exit code after a fatal message.

    Returns:
        Logger: Console- or file-backed logger.
    """
    if cfg.is_console:
        target = stream
        if target is None:
            target = sys.stdout if cfg.destination == "stdout" else sys.stderr
        return new_std_logger(
            cfg.timestamps, cfg.debug, cfg.trace, cfg.colors, cfg.pid,
            utc=cfg.utc, stream=target, exit_hook=exit_hook,
        )

    return new_file_logger(
        cfg.destination, cfg.timestamps, cfg.debug, cfg.trace, cfg.pid,
        utc=cfg.utc,
        size_limit=cfg.size_limit,
        max_files=cfg.max_files,
        exit_hook=exit_hook,
    )
