from __future__ import annotations

"""
Logger Configuration Domain.

Defines the construction-time configuration of a logger and the gatekeeper
that turns untrusted dictionaries (JSON files, CLI overrides) into a typed,
immutable LoggerConfig. Numeric rotation settings are never clamped:
negative values are rejected.
"""

import json
import logging
import os
import re
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional, Tuple

from rotalog.domain.errors import ConfigurationError
from rotalog.infra.fs import normalize_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONSOLE_DESTINATIONS = ("stderr", "stdout")

_SIZE_UNITS: Dict[str, int] = {
    "": 1,
    "B": 1,
    "K": 1000,
    "KB": 1000,
    "KIB": 1024,
    "M": 1000 ** 2,
    "MB": 1000 ** 2,
    "MIB": 1024 ** 2,
    "G": 1000 ** 3,
    "GB": 1000 ** 3,
    "GIB": 1024 ** 3,
}
_SIZE_RE = re.compile(r"^\s*(\d+)\s*([A-Za-z]*)\s*$")

_TRUE_WORDS = ("true", "1", "yes", "y", "on")
_FALSE_WORDS = ("false", "0", "no", "n", "off")


@dataclass(frozen=True)
class LoggerConfig:
    """
    Immutable construction-time configuration of a logger.

    Attributes:
        timestamps: Prefix each line with a timestamp.
        utc: Render timestamps in UTC instead of local time.
        debug: Emit debug-level calls.
        trace: Emit trace-level calls.
        colors: Color-code level tags (console destinations only).
        pid: Prefix each line with the process id.
        destination: "stderr", "stdout" or a file path.
        size_limit: Rotation threshold in bytes (0 disables rotation).
        max_files: Archives to retain (0 disables pruning).
    """
    timestamps: bool = True
    utc: bool = False
    debug: bool = False
    trace: bool = False
    colors: bool = False
    pid: bool = False
    destination: str = "stderr"
    size_limit: int = 0
    max_files: int = 0

    @property
    def is_console(self) -> bool:
        return is_console_destination(self.destination)


def is_console_destination(destination: Optional[str]) -> bool:
    """Return True when the destination names a standard stream."""
    return str(destination or "").strip().lower() in CONSOLE_DESTINATIONS


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration dictionary.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return asdict(LoggerConfig())


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: str) -> Dict[str, Any]:
    """
    Load a raw configuration dictionary from a JSON file.

    Args:
        path: JSON file location.

    Returns:
        Dict[str, Any]: Parsed content, or an empty dict if the file is missing.

    Raises:
        ConfigurationError: If the file is not valid JSON or not an object.
    """
    if not os.path.exists(path):
        logger.debug(f"Config file not found, using defaults: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed config file '{path}': {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Unreadable config file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file '{path}' must contain a JSON object, "
            f"found {type(data).__name__}."
        )
    return data


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------
def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[LoggerConfig, List[str]]:
    """
    Validate and normalize a raw configuration dictionary.

    Fills missing keys with defaults and coerces human-friendly values
    (e.g. "yes" for booleans, "10KB" for sizes). Every coercion is reported
    as a warning.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises TypeError on coercible type mismatches.

    Returns:
        Tuple[LoggerConfig, List[str]]: The typed configuration and warnings.

    Raises:
        ConfigurationError: Negative or unparsable size limit / file count.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return LoggerConfig(), warnings

    known = {f.name for f in fields(LoggerConfig)}
    for key in sorted(set(config) - known):
        warnings.append(f"Unknown config key '{key}' ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in known})

    for field in ("timestamps", "utc", "debug", "trace", "colors", "pid"):
        merged[field] = _as_bool(merged[field], defaults[field], field, warnings, strict)

    merged["size_limit"] = _as_count(merged["size_limit"], "size_limit", sizes=True)
    merged["max_files"] = _as_count(merged["max_files"], "max_files", sizes=False)
    merged["destination"] = _as_destination(merged["destination"], warnings)

    if merged["colors"] and not is_console_destination(merged["destination"]):
        warnings.append("Field 'colors' only applies to console destinations; ignored.")
        merged["colors"] = False

    if is_console_destination(merged["destination"]):
        for field in ("size_limit", "max_files"):
            if merged[field]:
                warnings.append(f"Field '{field}' only applies to file destinations; ignored.")
                merged[field] = 0

    return LoggerConfig(**merged), warnings


def parse_size(value: Any) -> int:
    """
    Parse a byte count given as an int or a string such as "512", "10KB", "2MiB".

    Raises:
        ConfigurationError: If the value is negative, fractional or unparsable.
    """
    return _as_count(value, "size_limit", sizes=True)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)

    if isinstance(value, int) and value in (0, 1):
        warnings.append(f"Field '{field}' converted from number {value} to bool.")
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE_WORDS:
            warnings.append(f"Field '{field}' converted from '{value}' to True.")
            return True
        if s in _FALSE_WORDS:
            warnings.append(f"Field '{field}' converted from '{value}' to False.")
            return False

    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_count(value: Any, field: str, *, sizes: bool) -> int:
    """Validate a non-negative integer, optionally accepting size suffixes."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid field '{field}': expected integer, received bool.")
    if isinstance(value, int):
        if value < 0:
            raise ConfigurationError(f"Invalid field '{field}': must be >= 0, received {value}.")
        return value
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("-"):
            raise ConfigurationError(f"Invalid field '{field}': must be >= 0, received {value!r}.")
        m = _SIZE_RE.match(s)
        if m:
            unit = m.group(2).upper()
            if unit in _SIZE_UNITS and (sizes or not unit):
                return int(m.group(1)) * _SIZE_UNITS[unit]

    raise ConfigurationError(f"Invalid field '{field}': cannot interpret {value!r}.")


def _as_destination(value: Any, warnings: List[str]) -> str:
    """Normalize the destination into a console stream name or absolute path."""
    if value is None or (isinstance(value, str) and not value.strip()):
        warnings.append("Field 'destination' empty; using 'stderr'.")
        return "stderr"
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Invalid field 'destination': expected str, received {type(value).__name__}."
        )
    if is_console_destination(value):
        return value.strip().lower()
    return normalize_path(value, fallback=value)
