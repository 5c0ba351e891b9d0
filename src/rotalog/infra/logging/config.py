from __future__ import annotations

"""
Diagnostics Logging Configuration.

Describes how rotalog's own diagnostic messages (rotations, prunes,
configuration warnings) are surfaced through the standard logging module.
These are separate from the lines a rotalog Logger writes.
"""

import logging
from dataclasses import dataclass
from typing import Dict

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable specification for the diagnostics logging setup.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        console_fmt: Structural format for terminal output.
    """
    level: str = "WARNING"
    console: bool = True
    console_fmt: str = "rotalog: %(levelname)s | %(name)s | %(message)s"
