from __future__ import annotations

"""
Error Taxonomy.

Every failure raised by the logging facility derives from LoggerError so
callers can guard a logging call with a single except clause. I/O failures
additionally derive from OSError and keep the original error chained.
"""


class LoggerError(Exception):
    """Base class for all rotalog errors."""


class ConfigurationError(LoggerError, ValueError):
    """Invalid configuration value (negative size limit, bad level name, ...)."""


class ClosedError(LoggerError):
    """Operation attempted on a sink or logger that has been closed."""

    def __init__(self, what: str = "log sink") -> None:
        super().__init__(f"{what} is closed")


class SinkIOError(LoggerError, OSError):
    """Open, write, rename or remove failure on the underlying destination."""
