from __future__ import annotations

"""
Unit tests for the CLI application controller.

Runs main() in-process with an injected stdin and checks exit codes and
file side effects.
"""

import io
import json
import logging
from pathlib import Path
from typing import Generator

import pytest

from rotalog.infra.logging import shutdown_logging
from rotalog.interface.cli.app import main


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """main() configures diagnostics; undo it around each test."""
    shutdown_logging()
    yield
    shutdown_logging()
    logging.getLogger().setLevel(logging.WARNING)


def test_copies_stdin_to_file(tmp_path: Path) -> None:
    """TC-01: Each stdin line becomes one tagged log line."""
    target = tmp_path / "out.log"
    stdin = io.StringIO("alpha\nbeta\r\ngamma")

    code = main(["-f", str(target), "--no-time", "--level", "warn"], stdin=stdin)

    assert code == 0
    assert target.read_text("utf-8") == "[WRN] alpha\n[WRN] beta\n[WRN] gamma\n"


def test_rotation_from_flags(tmp_path: Path) -> None:
    """TC-02: --size-limit and --max-files drive rotation and retention."""
    target = tmp_path / "out.log"
    stdin = io.StringIO("".join(f"line {i}\n" for i in range(30)))

    code = main(
        ["-f", str(target), "--no-time", "--size-limit", "20", "--max-files", "2"],
        stdin=stdin,
    )

    assert code == 0
    archives = sorted(p.name for p in tmp_path.iterdir() if p != target)
    assert len(archives) == 2
    assert target.read_text("utf-8") == "[INF] line 29\n"


def test_config_file_with_flag_override(tmp_path: Path) -> None:
    """TC-03: Flags take precedence over the JSON config file."""
    target = tmp_path / "out.log"
    conf = tmp_path / "rotalog.json"
    conf.write_text(json.dumps({"destination": str(target), "timestamps": True, "pid": True}))

    code = main(["--config", str(conf), "--no-time"], stdin=io.StringIO("hi\n"))

    assert code == 0
    line = target.read_text("utf-8")
    assert line.endswith("] [INF] hi\n")
    assert line.startswith("[")


def test_negative_size_limit_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-04: Invalid rotation settings exit with code 2 and write nothing."""
    target = tmp_path / "out.log"

    code = main(["-f", str(target), "--size-limit", "-1"], stdin=io.StringIO("x\n"))

    assert code == 2
    assert "size_limit" in capsys.readouterr().err
    assert not target.exists()


def test_dump_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-05: --dump-config prints the validated configuration and exits."""
    target = tmp_path / "dump.log"
    code = main(["-f", str(target), "--size-limit", "1KiB", "--dump-config"], stdin=io.StringIO(""))

    assert code == 0
    dumped = json.loads(capsys.readouterr().out)
    assert dumped["destination"] == str(target)
    assert dumped["size_limit"] == 1024
    assert not target.exists()


def test_rotation_flags_ignored_for_console(capsys: pytest.CaptureFixture[str]) -> None:
    """TC-06: Rotation flags on a console destination are dropped with a warning."""
    code = main(["--stdout", "--size-limit", "1KiB", "--max-files", "3", "--dump-config"], stdin=io.StringIO(""))

    assert code == 0
    dumped = json.loads(capsys.readouterr().out)
    assert dumped["size_limit"] == 0
    assert dumped["max_files"] == 0


def test_unopenable_destination(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-07: A destination that cannot be opened exits with code 1."""
    code = main(["-f", str(tmp_path)], stdin=io.StringIO("x\n"))

    assert code == 1
    assert "ERROR" in capsys.readouterr().err
