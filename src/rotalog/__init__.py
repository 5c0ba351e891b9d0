from __future__ import annotations

from rotalog.core.default import (
    debug,
    error,
    fatal,
    get_default_logger,
    init_default_logger,
    notice,
    shutdown_default_logger,
    trace,
    warn,
)
from rotalog.core.formatter import LineFormatter
from rotalog.core.logger import Logger, create_logger, new_file_logger, new_std_logger
from rotalog.core.rotation import RotatingFileSink
from rotalog.core.sinks import ByteSink, ConsoleSink
from rotalog.domain.config import LoggerConfig, validate_config
from rotalog.domain.errors import ClosedError, ConfigurationError, LoggerError, SinkIOError
from rotalog.domain.levels import Level, LevelFilter

__version__ = "0.1.0"

__all__ = [
    "ByteSink",
    "ClosedError",
    "ConfigurationError",
    "ConsoleSink",
    "Level",
    "LevelFilter",
    "LineFormatter",
    "Logger",
    "LoggerConfig",
    "LoggerError",
    "RotatingFileSink",
    "SinkIOError",
    "create_logger",
    "debug",
    "error",
    "fatal",
    "get_default_logger",
    "init_default_logger",
    "new_file_logger",
    "new_std_logger",
    "notice",
    "shutdown_default_logger",
    "trace",
    "validate_config",
    "warn",
]
