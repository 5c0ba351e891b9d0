from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization and the archive naming/discovery helpers used
by the rotation engine. Archives live next to the active file and carry a
zero-padded, monotonically increasing sequence suffix.
"""

import os
import re
from typing import List, Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

ARCHIVE_SEQUENCE_WIDTH = 6

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a file path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def ensure_parent_dir(path: str) -> None:
    """
    Create the parent directory hierarchy for a target file.

    Args:
        path: Path to the target file.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)

# -----------------------------------------------------------------------------
# ARCHIVE API
# -----------------------------------------------------------------------------

def archive_name(path: str, sequence: int) -> str:
    """
    Build the archive path for a given rotation sequence.

    Args:
        path: Active log file path.
        sequence: Rotation sequence number (1-based).

    Returns:
        str: Sibling path such as ``app.log.000007``.
    """
    return f"{path}.{sequence:0{ARCHIVE_SEQUENCE_WIDTH}d}"


def list_archives(path: str) -> List[Tuple[int, str]]:
    """
    Discover the archives of an active log file already present on disk.

    Only suffixes of exactly ARCHIVE_SEQUENCE_WIDTH digits are recognised, so
    siblings written by other rotation schemes (``app.log.1``,
    ``app.log.20261018``) are never adopted and never pruned.

    Args:
        path: Active log file path.

    Returns:
        List[Tuple[int, str]]: (sequence, archive path) pairs, newest first.
    """
    directory = os.path.dirname(os.path.abspath(path))
    base = os.path.basename(path)
    pattern = re.compile(re.escape(base) + r"\.(\d{%d})$" % ARCHIVE_SEQUENCE_WIDTH)

    try:
        entries = os.listdir(directory)
    except FileNotFoundError:
        return []

    found: List[Tuple[int, str]] = []
    for entry in entries:
        m = pattern.match(entry)
        if m and os.path.isfile(os.path.join(directory, entry)):
            found.append((int(m.group(1)), os.path.join(directory, entry)))

    found.sort(reverse=True)
    return found


def remove_file(path: str) -> bool:
    """
    Delete a file.

    Args:
        path: File to delete.

    Returns:
        bool: True if the file was removed, False if it was already gone.

    Raises:
        OSError: Any failure other than the file being absent.
    """
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        return False
