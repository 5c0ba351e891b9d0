from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for log paths and an observable fatal exit hook.
"""

import os
import sys
from pathlib import Path
from typing import List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
class ExitRecorder:
    """Stand-in for process termination that records requested exit codes."""

    def __init__(self) -> None:
        self.codes: List[int] = []

    def __call__(self, code: int) -> None:
        self.codes.append(code)


@pytest.fixture
def exit_hook() -> ExitRecorder:
    """Return an exit hook that records codes instead of ending the test run."""
    return ExitRecorder()


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    """Return the active log file path inside an isolated directory."""
    return tmp_path / "logs" / "app.log"
