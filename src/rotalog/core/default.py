from __future__ import annotations

"""
Process-Wide Default Logger.

Holds one explicitly constructed Logger for callers that do not keep their
own reference. Initialisation is explicit (or happens on first use with a
console configuration), teardown is explicit and also registered with
atexit. All state changes go through a single module lock.
"""

import atexit
import logging
import threading
from typing import Any, Optional

from rotalog.core.logger import Logger, create_logger
from rotalog.domain.config import LoggerConfig

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_default: Optional[Logger] = None
_atexit_registered = False


# -----------------------------------------------------------------------------
# LIFECYCLE
# -----------------------------------------------------------------------------

def init_default_logger(cfg: Optional[LoggerConfig] = None, *, force: bool = False) -> Logger:
    """
    Install the process-wide logger.

    Idempotent: an existing instance is returned unchanged unless force is
    set, in which case it is closed and replaced.

    Args:
        cfg: Configuration for the new instance (console defaults if None).
        force: Replace an already installed instance.

    Returns:
        Logger: The installed instance.
    """
    global _default, _atexit_registered

    with _lock:
        if _default is not None and not force:
            return _default

        replacement = create_logger(cfg or LoggerConfig())
        previous, _default = _default, replacement

        if not _atexit_registered:
            atexit.register(shutdown_default_logger)
            _atexit_registered = True

    if previous is not None:
        logger.debug("Replacing process-wide logger")
        previous.close()
    return replacement


def get_default_logger() -> Logger:
    """Return the process-wide logger, creating a console one on first use."""
    with _lock:
        current = _default
    if current is not None:
        return current
    return init_default_logger()


def shutdown_default_logger() -> None:
    """Close and discard the process-wide logger. Safe to call repeatedly."""
    global _default

    with _lock:
        current, _default = _default, None
    if current is not None:
        current.close()


# -----------------------------------------------------------------------------
# CONVENIENCE API
# -----------------------------------------------------------------------------

def notice(msg: Any, *args: Any) -> None:
    get_default_logger().notice(msg, *args)


def warn(msg: Any, *args: Any) -> None:
    get_default_logger().warn(msg, *args)


def error(msg: Any, *args: Any) -> None:
    get_default_logger().error(msg, *args)


def fatal(msg: Any, *args: Any) -> None:
    get_default_logger().fatal(msg, *args)


def debug(msg: Any, *args: Any) -> None:
    get_default_logger().debug(msg, *args)


def trace(msg: Any, *args: Any) -> None:
    get_default_logger().trace(msg, *args)
