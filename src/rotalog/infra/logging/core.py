from __future__ import annotations

"""
Diagnostics Logging Orchestrator.

Maintains the idempotent lifecycle of the diagnostics logging setup. Records
are pushed through a QueueHandler and written by a QueueListener thread, so
emitting a diagnostic from inside the rotation critical section never waits
on terminal I/O.

Only entry points (the CLI) call configure_logging(); library modules just
call get_logger(__name__).
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from rotalog.infra.logging.config import _LEVEL_MAP, LoggingConfig
from rotalog.infra.logging.handlers import (
    _create_console_handler,
    _is_our_handler,
    _tag_handler,
)

# Internal state flags for idempotency and lifecycle tracking
_CONFIGURED_FLAG_ATTR: str = "_rotalog_configured"
_QUEUE_LISTENER_ATTR: str = "_rotalog_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once, using a queue-backed console handler.

    Args:
        cfg: Diagnostics configuration.
        force: If True, drop our previous handlers and re-initialize.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    already_configured = bool(getattr(root, _CONFIGURED_FLAG_ATTR, False))
    if already_configured and not force:
        return root

    level_int = _parse_level(cfg.level)
    root.setLevel(level_int)

    _remove_our_handlers(root)
    _stop_existing_listener(root)

    handlers_list: List[logging.Handler] = []
    if cfg.console:
        handlers_list.append(
            _create_console_handler(level_int, logging.Formatter(cfg.console_fmt))
        )

    if handlers_list:
        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
        listener.start()

        root.addHandler(queue_handler)
        setattr(root, _QUEUE_LISTENER_ATTR, listener)

        # Flush pending diagnostics on interpreter shutdown
        atexit.register(_safe_stop_listener, listener)

    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def shutdown_logging() -> None:
    """Stop the listener, detach our handlers and clear the configured flag."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger instance.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(root: logging.Logger) -> None:
    """Detach and close all handlers tagged as ours."""
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    """Terminate and release the existing QueueListener."""
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating listeners that were already stopped.

    QueueListener.stop() fails on a second call because its thread handle
    has been cleared, which happens when atexit runs after a test reset.
    """
    if not listener:
        return

    if getattr(listener, "_thread", None) is not None:
        try:
            listener.stop()
        except RuntimeError as e:
            sys.stderr.write(f"rotalog: failed to stop diagnostics listener: {e}\n")
