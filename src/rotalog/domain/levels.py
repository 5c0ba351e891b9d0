from __future__ import annotations

"""
Severity Levels and Level Filter.

Defines the fixed severity vocabulary, its short line tags and console
colors, and the pure filter that decides whether a call at a given
severity produces output.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

from rotalog.domain.errors import ConfigurationError


class Level(IntEnum):
    """Severities ordered from most to least severe."""
    FATAL = 0
    ERROR = 1
    WARNING = 2
    NOTICE = 3
    DEBUG = 4
    TRACE = 5


# -----------------------------------------------------------------------------
# TAGS & COLORS
# -----------------------------------------------------------------------------

LEVEL_TAGS: Dict[Level, str] = {
    Level.FATAL: "FTL",
    Level.ERROR: "ERR",
    Level.WARNING: "WRN",
    Level.NOTICE: "INF",
    Level.DEBUG: "DBG",
    Level.TRACE: "TRC",
}

# ANSI SGR parameters used when console colors are enabled
LEVEL_COLORS: Dict[Level, str] = {
    Level.FATAL: "31",
    Level.ERROR: "31",
    Level.WARNING: "0;93",
    Level.NOTICE: "32",
    Level.DEBUG: "36",
    Level.TRACE: "33",
}

_NAME_MAP: Dict[str, Level] = {
    "FATAL": Level.FATAL,
    "FTL": Level.FATAL,
    "CRITICAL": Level.FATAL,
    "ERROR": Level.ERROR,
    "ERR": Level.ERROR,
    "WARNING": Level.WARNING,
    "WARN": Level.WARNING,
    "WRN": Level.WARNING,
    "NOTICE": Level.NOTICE,
    "INFO": Level.NOTICE,
    "INF": Level.NOTICE,
    "DEBUG": Level.DEBUG,
    "DBG": Level.DEBUG,
    "TRACE": Level.TRACE,
    "TRC": Level.TRACE,
}


def parse_level(name: str) -> Level:
    """
    Resolve a level from its name, alias or short tag (case-insensitive).

    Raises:
        ConfigurationError: If the name is not part of the vocabulary.
    """
    key = str(name or "").strip().upper()
    try:
        return _NAME_MAP[key]
    except KeyError:
        raise ConfigurationError(f"Unknown log level: {name!r}") from None


# -----------------------------------------------------------------------------
# LEVEL FILTER
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LevelFilter:
    """
    Maps the configured verbosity to an emit/suppress decision.

    Notice, warning and error always emit. Fatal emits unconditionally since
    it precedes process termination. Debug and trace are opt-in.
    """
    debug: bool = False
    trace: bool = False

    def enabled(self, level: Level) -> bool:
        if level == Level.DEBUG:
            return self.debug
        if level == Level.TRACE:
            return self.trace
        return True
