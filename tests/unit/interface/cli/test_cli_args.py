from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Unset flags produce no override.
3. Level choices implying debug/trace.
"""

import pytest

from rotalog.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_defaults_produce_no_overrides() -> None:
    """TC-01: Without flags nothing overrides the config file or defaults."""
    args = parse_args([])

    assert args_to_overrides(args) == {}
    assert args.level == "notice"


def test_cli_file_and_rotation_flags() -> None:
    """TC-02: Destination and rotation flags map to config keys verbatim."""
    args = parse_args(["-f", "/var/log/app.log", "--size-limit", "10MB", "--max-files", "5"])

    overrides = args_to_overrides(args)

    assert overrides["destination"] == "/var/log/app.log"
    assert overrides["size_limit"] == "10MB"
    assert overrides["max_files"] == "5"


def test_cli_format_flags() -> None:
    """TC-03: Boolean flags are mapped to the matching settings."""
    args = parse_args(["--no-time", "--utc", "--pid", "--colors", "--stdout"])

    overrides = args_to_overrides(args)

    assert overrides == {
        "destination": "stdout",
        "timestamps": False,
        "utc": True,
        "pid": True,
        "colors": True,
    }


def test_cli_debug_level_implies_debug() -> None:
    """TC-04: Logging stdin at debug or trace enables that level."""
    assert args_to_overrides(parse_args(["--level", "debug"]))["debug"] is True
    assert args_to_overrides(parse_args(["--level", "trace"]))["trace"] is True
    assert args_to_overrides(parse_args(["--trace-level"])) == {"trace": True}


def test_cli_file_and_stdout_exclusive() -> None:
    """TC-05: A file destination and --stdout cannot be combined."""
    with pytest.raises(SystemExit):
        parse_args(["-f", "a.log", "--stdout"])


def test_cli_rejects_fatal_level() -> None:
    """TC-06: Fatal is not offered as a per-line level."""
    with pytest.raises(SystemExit):
        parse_args(["--level", "fatal"])
