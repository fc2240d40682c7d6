"""
Noema CLI entry point.

Usage:
    noema FILE [--tokens] [--ast] [--trace] [--config PATH] [--log-level LEVEL]

Runs a Noema program, or dumps its tokens / AST for debugging. Exactly one
diagnostic line is printed to stderr when the run fails, and the exit
status is 1.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from noema import __version__
from noema.config import apply_env_overrides, load_config
from noema.debug import dump_ast, dump_tokens
from noema.driver import make_lexer, parse, run_stream
from noema.errors import ConfigError
from noema.lang import LANGUAGE_VERSION

from .output import print_error, print_lines

LOG_LEVEL_ENV = "NOEMA_LOG_LEVEL"

_LEVEL_MAP = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


def _configure_runtime_logging(args) -> None:
    """Configure the ``noema`` logger from CLI args or the environment."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv(LOG_LEVEL_ENV, 'warning')
    ).lower()
    numeric_level = _LEVEL_MAP.get(log_level, logging.WARNING)

    root_logger = logging.getLogger('noema')
    root_logger.setLevel(numeric_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        root_logger.propagate = False

    # --trace reports every executed statement
    if getattr(args, 'trace', False):
        logging.getLogger('noema.runtime').setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="noema",
        description="Noema – run indentation-structured Noema scripts",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__} (language {LANGUAGE_VERSION})",
    )
    parser.add_argument('file', help='Path to the .noema source file')
    parser.add_argument('--tokens', action='store_true', help='Tokenize only (debug)')
    parser.add_argument('--ast', action='store_true', help='Parse and print AST only (debug)')
    parser.add_argument('--trace', action='store_true', help='Trace execution (debug)')
    parser.add_argument('--config', default=None, help='Path to a noema.toml configuration file')
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'warning', 'error'],
        default=None,
        help=f'Set logging level (or set {LOG_LEVEL_ENV})',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entrypoint.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Returns:
        Process exit status (0 on success, 1 on any failure)

    Examples:
        >>> main(['hello.noema'])  # doctest: +SKIP
        salve
    """
    if argv is None:
        argv = sys.argv[1:]

    args = build_parser().parse_args(argv)
    _configure_runtime_logging(args)

    source_path = Path(args.file)
    try:
        config = load_config(Path.cwd(), Path(args.config) if args.config else None)
        config = apply_env_overrides(config)
    except ConfigError as exc:
        print_error(exc.format())
        return 1

    display_path = str(args.file)
    try:
        handle = open(source_path, "r", encoding="utf-8", newline="")
    except OSError as exc:
        print_error(f"noema: cannot open '{display_path}': {exc.strerror or exc}")
        return 1

    with handle:
        if args.tokens:
            lexer = make_lexer(handle, display_path, config)
            print_lines(dump_tokens(lexer))
            if lexer.has_error:
                print_error(lexer.error_message)
                return 1
            return 0

        if args.ast:
            parsed = parse(handle, display_path, config)
            if not parsed.ok:
                print_error(parsed.message)
                return 1
            print_lines(dump_ast(parsed.program))
            return 0

        result = run_stream(handle, display_path, config=config)

    if not result.ok:
        print_error(result.message or "Noema: failed.")
        return 1
    return 0


__all__ = ["main", "build_parser", "_configure_runtime_logging"]
