"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m sellsy_cli call <Module.method> [--params JSON] [--json] [--debug]
    python -m sellsy_cli infos [--json]
    python -m sellsy_cli modules [--json]
    python -m sellsy_cli config --init | --show

Environment Variables:
    SELLSY_API_URL              API endpoint
    SELLSY_CONSUMER_KEY         OAuth consumer key
    SELLSY_CONSUMER_SECRET      OAuth consumer secret
    SELLSY_ACCESS_TOKEN         OAuth access token
    SELLSY_ACCESS_TOKEN_SECRET  OAuth access token secret
    SELLSY_TLS_POLICY           auto, always or never (default: auto)
    SELLSY_LOG_LEVEL            Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from sellsy.collection import ApiModule
from sellsy_cli import __version__
from sellsy_cli.commands import api
from sellsy_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_API_ERROR = 2


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
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sellsy",
        description="Sellsy API CLI - Call API methods with OAuth-signed requests.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./sellsy.yaml or ~/.config/sellsy/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- call command ---
    call_parser = subparsers.add_parser(
        "call",
        help="Call one API method",
        description="Send a signed request for <Module.method> and print the answer.",
    )
    call_parser.add_argument(
        "method",
        type=str,
        help="API method, e.g. Document.getList",
    )
    call_parser.add_argument(
        "--params", "-p",
        type=str,
        default=None,
        help="Call parameters as a JSON object",
    )
    call_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    call_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include the request body in output",
    )
    call_parser.set_defaults(func=api.call_cmd)

    # --- infos command ---
    infos_parser = subparsers.add_parser(
        "infos",
        help="Show account information (Infos.getInfos)",
    )
    infos_parser.add_argument("--json", action="store_true", help="JSON output")
    infos_parser.add_argument("--debug", action="store_true", help="Debug mode")
    infos_parser.set_defaults(func=api.infos_cmd)

    # --- modules command ---
    modules_parser = subparsers.add_parser(
        "modules",
        help="List known API modules",
        description="Show the API modules and the client accessor for each one.",
    )
    modules_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="JSON output",
    )
    modules_parser.set_defaults(func=modules_cmd)

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
        help="Show current configuration (secrets masked)",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="sellsy.yaml",
        help="Path for config file (default: sellsy.yaml)",
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
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (SELLSY_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = getattr(args, "cli_config", None) or load_config(Path(args.path))
        print(json.dumps(config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: sellsy config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def modules_cmd(args: argparse.Namespace) -> int:
    """Handle modules command."""
    modules = [
        {"module": module.value, "accessor": module.accessor_name}
        for module in ApiModule
    ]

    if args.json:
        print(json.dumps(modules, indent=2))
    else:
        for entry in modules:
            print(f"  - {entry['module']:<16} client.{entry['accessor']}()")

    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=API error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if hasattr(args, "debug") and args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
