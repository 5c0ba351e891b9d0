from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: diagnostics bootstrap, configuration merging
(defaults, JSON file, command-line overrides), validation, and the
stdin-to-log copy loop.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, TextIO

from rotalog.core.logger import create_logger
from rotalog.domain.config import get_default_config, load_config, validate_config
from rotalog.domain.errors import ConfigurationError, LoggerError, SinkIOError
from rotalog.domain.levels import parse_level
from rotalog.infra.logging import LoggingConfig, configure_logging, get_logger
from rotalog.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.
        stdin: Input stream to copy from. Defaults to sys.stdin.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Diagnostics bootstrap
    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "WARNING"))

    # 3. Configuration hierarchy
    try:
        base_conf = get_default_config()
        if args.config_path:
            base_conf = _merge_config(base_conf, load_config(args.config_path))
        raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
        cfg, warnings = validate_config(raw_conf, strict=False)
        level = parse_level(args.level)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(asdict(cfg), ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Logger construction
    try:
        log = create_logger(cfg)
    except LoggerError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    logger.debug(f"Copying stdin to {cfg.destination} at level {level.name}")

    # 5. Copy loop
    source = stdin if stdin is not None else sys.stdin
    exit_code = EXIT_OK
    try:
        for line in source:
            try:
                log.log(level, line.rstrip("\r\n"))
            except SinkIOError as e:
                # keep going; the next line may land once the fault clears
                print(f"ERROR: {e}", file=sys.stderr)
                exit_code = EXIT_IO_ERROR
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        exit_code = EXIT_INTERRUPTED
    finally:
        log.close()

    return exit_code

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    None values are skipped so an unset source never erases a lower layer.

    Args:
        base: The lower-precedence configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out
