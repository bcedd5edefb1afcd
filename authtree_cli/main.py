"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m authtree_cli init [--depth N] [--hasher NAME]
    python -m authtree_cli root [--json]
    python -m authtree_cli get INDEX [--offset] [--out PATH] [--json]
    python -m authtree_cli set INDEX VALUE [--offset] [--raw] [--out PATH] [--json]
    python -m authtree_cli verify PROOF [--root HEX] [--json]
    python -m authtree_cli config --init

Environment Variables:
    AUTHTREE_STORE        Store directory (default: .authtree)
    AUTHTREE_BACKEND      Storage backend: file or memory
    AUTHTREE_DEPTH        Depth for new stores
    AUTHTREE_HASHER       Hasher for new stores (sha256, blake2b)
    AUTHTREE_LOG_LEVEL    Log level (default: INFO)
    AUTHTREE_LOG_FILE     Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from authtree import __version__
from authtree.crypto.hasher import HASHERS
from authtree.merkle.indexing import MAX_DEPTH
from authtree.schemas.errors import AuthTreeException

from authtree_cli.commands import init, leaf, root, verify
from authtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
)
from authtree_cli.config import get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _depth_arg(value: str) -> int:
    depth = int(value)
    if depth < 1 or depth > MAX_DEPTH:
        raise argparse.ArgumentTypeError(f"depth must be between 1 and {MAX_DEPTH}")
    return depth


def _add_index_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "index",
        type=int,
        help="Global leaf index (or local offset with --offset)",
    )
    parser.add_argument(
        "--offset",
        action="store_true",
        default=False,
        help="Interpret INDEX as a 0-based offset among leaves",
    )


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this path",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="authtree",
        description="Authenticated tree CLI - read and write leaves with proofs, verify proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./authtree.json or ~/.config/authtree/config.json)",
    )
    parser.add_argument(
        "--store", "-s",
        type=str,
        default=None,
        help="Store directory (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- init command ---
    init_parser = subparsers.add_parser(
        "init",
        help="Create a new tree store",
        description="Create a store whose leaves all hold the default value.",
    )
    init_parser.add_argument(
        "--depth",
        type=_depth_arg,
        default=None,
        help="Tree depth (default: from config or 20)",
    )
    init_parser.add_argument(
        "--hasher",
        type=str,
        choices=sorted(HASHERS),
        default=None,
        help="Hash function (default: from config or sha256)",
    )
    init_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    init_parser.set_defaults(func=init.init_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Show the current root",
    )
    root_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    root_parser.set_defaults(func=root.root_cmd)

    # --- get command ---
    get_parser = subparsers.add_parser(
        "get",
        help="Read a leaf with its inclusion proof",
    )
    _add_index_args(get_parser)
    _add_output_args(get_parser)
    get_parser.set_defaults(func=leaf.get_cmd)

    # --- set command ---
    set_parser = subparsers.add_parser(
        "set",
        help="Write a leaf and print the proof against the new root",
    )
    _add_index_args(set_parser)
    set_parser.add_argument(
        "value",
        type=str,
        help="Leaf value as 0x hex (32 bytes, or whole 32-byte elements with --raw)",
    )
    set_parser.add_argument(
        "--raw",
        action="store_true",
        default=False,
        help="Hash VALUE with the tree's hasher before storing it",
    )
    _add_output_args(set_parser)
    set_parser.set_defaults(func=leaf.set_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof document offline",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a proof JSON document",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Require the proof to be against this root (0x hex)",
    )
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="authtree.json",
        help="Path for config file (default: authtree.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (AUTHTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: authtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.store:
        config.tree.store_path = args.store

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AuthTreeException as e:
        if args.debug:
            traceback.print_exc()
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


__all__ = ["main", "create_parser", "setup_logging"]


if __name__ == "__main__":
    sys.exit(main())
