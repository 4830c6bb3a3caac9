"""
Proof Tree CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m prooftree_cli build <hash|-> [<hash|-> ...] [--hash-data] [--encode] [--json]
    python -m prooftree_cli walk <hex> [--json]
    python -m prooftree_cli config --show

Environment Variables:
    PROOFTREE_STRICT_MODE       Raise on malformed proof nodes (default: false)
    PROOFTREE_HASH_SIZE         Leaf hash width in bytes (default: 32)
    PROOFTREE_MAX_DEPTH         Maximum decoded nesting depth (default: 256)
    PROOFTREE_LOG_LEVEL         Log level (default: INFO)
    PROOFTREE_LOG_FILE          Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from prooftree.config.runtime import RuntimeConfig
from prooftree.schemas.errors import ConfigurationException
from prooftree_cli import __version__
from prooftree_cli.commands import build, walk
from prooftree_cli.output import EXIT_INVALID_INPUT, EXIT_SUCCESS, report_error


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


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="prooftree",
        description="Assemble, encode and walk Merkle multi-proof trees.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Assemble a proof tree from a bottom layer",
        description="Merge a bottom layer layer-by-layer and walk the resulting tree.",
    )
    build_parser.add_argument(
        "leaves",
        nargs="+",
        help="Hex leaf hashes; use '-' for a slot absent from the proof",
    )
    build_parser.add_argument(
        "--hash-data",
        action="store_true",
        default=False,
        help="Treat arguments as raw strings and SHA-256 them",
    )
    build_parser.add_argument(
        "--encode",
        action="store_true",
        default=False,
        help="Also print the binary-encoded tree as hex",
    )
    build_parser.add_argument("--json", action="store_true", help="JSON output")
    build_parser.add_argument("--debug", action="store_true", help="Debug mode")
    build_parser.set_defaults(func=build.build_cmd)

    # --- walk command ---
    walk_parser = subparsers.add_parser(
        "walk",
        help="Decode an encoded proof tree and print its traversal",
    )
    walk_parser.add_argument("encoded", type=str, help="Hex-encoded proof tree")
    walk_parser.add_argument("--json", action="store_true", help="JSON output")
    walk_parser.add_argument("--debug", action="store_true", help="Debug mode")
    walk_parser.set_defaults(func=walk.walk_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace, config: RuntimeConfig) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: prooftree config --show")
    return EXIT_SUCCESS


def load_runtime_config(config_path: Path | None) -> RuntimeConfig:
    """Load config from YAML (if given), then overlay environment variables."""
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()
    return RuntimeConfig.from_env()


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        config = load_runtime_config(args.config)
    except ConfigurationException as e:
        report_error(e, getattr(args, "json", False))
        return EXIT_INVALID_INPUT
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    setup_logging(args.log_level or config.logging.level, config.logging.file)

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
