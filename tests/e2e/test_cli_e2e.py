from __future__ import annotations

"""
End-to-End (E2E) Tests.

Invokes the package entry point in a separate interpreter to validate exit
codes, stream output and file side effects, including real process
termination on fatal messages.
"""

import os
import subprocess
import sys
import textwrap
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"


def _env() -> dict:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    return env


def run_cli(args: List[str], stdin: str = "") -> subprocess.CompletedProcess[str]:
    """
    Execute `python -m rotalog` with the 'src' directory on PYTHONPATH.

    Args:
        args: Command line arguments.
        stdin: Text piped to the process.

    Returns:
        subprocess.CompletedProcess: Result with returncode, stdout and stderr.
    """
    return subprocess.run(
        [sys.executable, "-m", "rotalog"] + args,
        input=stdin,
        env=_env(),
        capture_output=True,
        text=True,
        timeout=60,
    )


def test_cli_e2e_console_output() -> None:
    """TC-01: Lines piped in are echoed to stdout with the level tag."""
    result = run_cli(["--stdout", "--no-time", "--level", "error"], stdin="one\ntwo\n")

    assert result.returncode == 0
    assert result.stdout == "[ERR] one\n[ERR] two\n"


def test_cli_e2e_rotating_file(tmp_path: Path) -> None:
    """TC-02: A 1 KB limit over ~1600 bytes produces one archive in original order."""
    target = tmp_path / "app.log"
    payload = "".join(f"Log message number {i:02d} ".ljust(73, "x") + "\n" for i in range(20))

    result = run_cli(["-f", str(target), "--no-time", "--size-limit", "1024"], stdin=payload)

    assert result.returncode == 0, result.stderr
    archive = tmp_path / "app.log.000001"
    assert archive.exists()
    assert len(archive.read_text("utf-8").splitlines()) == 12
    assert len(target.read_text("utf-8").splitlines()) == 8
    assert sorted(p.name for p in tmp_path.iterdir()) == ["app.log", "app.log.000001"]


def test_cli_e2e_config_error_exit_code(tmp_path: Path) -> None:
    """TC-03: A negative file count exits with code 2."""
    result = run_cli(["-f", str(tmp_path / "a.log"), "--max-files", "-2"], stdin="x\n")

    assert result.returncode == 2
    assert "max_files" in result.stderr


def test_fatal_terminates_process_after_write(tmp_path: Path) -> None:
    """TC-04: fatal() records the line, then the process exits with code 1."""
    target = tmp_path / "fatal.log"
    script = textwrap.dedent(
        f"""
        from rotalog import new_file_logger
        log = new_file_logger({str(target)!r}, False, False, False, True)
        log.notice("before")
        log.fatal("stopping: %s", "disk gone")
        print("unreachable")
        """
    )

    result = subprocess.run(
        [sys.executable, "-c", script],
        env=_env(),
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 1
    assert "unreachable" not in result.stdout
    lines = target.read_text("utf-8").splitlines()
    assert lines[0].endswith("[INF] before")
    assert lines[1].endswith("[FTL] stopping: disk gone")
    assert lines[1].startswith("[")
