from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the rotalog pipe tool and translates the
parsed namespace into configuration overrides keyed like LoggerConfig.
"""

import argparse
from typing import Any, Dict

LINE_LEVELS = ("notice", "warn", "error", "debug", "trace")

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the rotalog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="rotalog",
        description=(
            "Read lines from stdin and write them as leveled log lines to a "
            "console stream or a size-rotated log file."
        ),
    )

    # --- Destination ---
    dest = p.add_mutually_exclusive_group()
    dest.add_argument(
        "-f", "--file",
        dest="destination",
        default=None,
        help="Log file path. Defaults to stderr.",
    )
    dest.add_argument(
        "--stdout",
        action="store_true",
        help="Write to stdout instead of stderr.",
    )

    # --- Rotation & Retention ---
    p.add_argument(
        "--size-limit",
        dest="size_limit",
        default=None,
        help="Rotate once the file would exceed this size (e.g. 1048576, 10MB, 1MiB). 0 disables.",
    )
    p.add_argument(
        "--max-files",
        dest="max_files",
        default=None,
        help="Number of rotated archives to keep. 0 keeps all.",
    )

    # --- Line Format ---
    p.add_argument(
        "--level",
        choices=LINE_LEVELS,
        default="notice",
        help="Level used for every line read from stdin.",
    )
    p.add_argument("--no-time", action="store_true", help="Omit timestamps.")
    p.add_argument("--utc", action="store_true", help="Render timestamps in UTC.")
    p.add_argument("--pid", action="store_true", help="Prefix lines with the process id.")
    p.add_argument("--colors", action="store_true", help="Color-code level tags (console only).")

    # --- Verbosity ---
    p.add_argument("--debug-level", action="store_true", help="Emit debug-level lines.")
    p.add_argument("--trace-level", action="store_true", help="Emit trace-level lines.")

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON file with logger settings (flags take precedence).",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate rotalog's own diagnostics to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into LoggerConfig overrides.

    Only flags the user actually set produce a key, so values loaded from a
    config file are kept unless explicitly overridden.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.destination:
        overrides["destination"] = args.destination
    elif args.stdout:
        overrides["destination"] = "stdout"

    if args.size_limit is not None:
        overrides["size_limit"] = args.size_limit
    if args.max_files is not None:
        overrides["max_files"] = args.max_files

    if args.no_time:
        overrides["timestamps"] = False
    if args.utc:
        overrides["utc"] = True
    if args.pid:
        overrides["pid"] = True
    if args.colors:
        overrides["colors"] = True

    # A debug/trace line level implies that level is enabled
    if args.debug_level or args.level == "debug":
        overrides["debug"] = True
    if args.trace_level or args.level == "trace":
        overrides["trace"] = True

    return overrides
