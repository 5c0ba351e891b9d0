from __future__ import annotations

"""
Diagnostics Handlers and Tagging Utilities.

Tags the handlers installed by configure_logging so they can be told apart
from handlers the host application attached to the same root logger.
"""

import logging
import sys
from typing import Optional, TextIO

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_rotalog_handler"


def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as installed by rotalog."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    """Return True if the handler carries our internal tag."""
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(
        level_int: int,
        formatter: logging.Formatter,
        stream: Optional[TextIO] = None,
) -> logging.StreamHandler:
    """
    Build a tagged stderr handler.

    Args:
        level_int: Numeric logging level.
        formatter: Pre-configured logging formatter.
        stream: Target stream (stderr if None).

    Returns:
        logging.StreamHandler: Configured handler.
    """
    sh = logging.StreamHandler(stream if stream is not None else sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh
