from __future__ import annotations

"""
Line Formatter.

Renders one log line: optional timestamp, optional process id, the level
tag and the message, UTF-8 encoded and newline-terminated.
"""

import os
from datetime import datetime, timezone
from typing import Callable, Optional

from rotalog.domain.levels import LEVEL_COLORS, LEVEL_TAGS, Level

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S.%f"


class LineFormatter:
    """Deterministic line renderer; holds configuration only."""

    def __init__(
            self,
            *,
            timestamps: bool = True,
            utc: bool = False,
            pid: bool = False,
            colors: bool = False,
            clock: Optional[Callable[[], datetime]] = None,
            pid_value: Optional[int] = None,
    ) -> None:
        self.timestamps = timestamps
        self.utc = utc
        self.colors = colors
        self._clock = clock
        self._pid_prefix = f"[{pid_value if pid_value is not None else os.getpid()}] " if pid else ""

    def _now(self) -> datetime:
        if self._clock is not None:
            return self._clock()
        if self.utc:
            return datetime.now(timezone.utc)
        return datetime.now()

    def _tag(self, level: Level) -> str:
        tag = LEVEL_TAGS[level]
        if self.colors:
            return f"[\x1b[{LEVEL_COLORS[level]}m{tag}\x1b[0m] "
        return f"[{tag}] "

    def format(self, level: Level, message: str) -> bytes:
        parts = []
        if self.timestamps:
            parts.append(self._now().strftime(TIMESTAMP_FORMAT) + " ")
        parts.append(self._pid_prefix)
        parts.append(self._tag(level))
        parts.append(message)
        if not message.endswith("\n"):
            parts.append("\n")
        return "".join(parts).encode("utf-8", errors="replace")
