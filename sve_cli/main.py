"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m sve_cli keygen [--public PATH] [--private PATH] [--force]
    python -m sve_cli sign <private key file> < infile [> outfile]
    python -m sve_cli verify [--public-key PATH] < infile [--json] [--strict]
    python -m sve_cli config --init

Environment Variables:
    SVE_LINE_ENDING_POLICY      normalize (default) or preserve_crlf
    SVE_HEADER_DIALECT          standard (default) or legacy
    SVE_KEY_SOURCE              embedded (default) or file
    SVE_STRICT_MODE             Exit 2 on an invalid signature (default: false)
    SVE_PUBLIC_KEY_FILE         Default public key file (default: pubkey)
    SVE_PRIVATE_KEY_FILE        Default private key file (default: privkey)
    SVE_LOG_LEVEL               Log level (default: WARNING)
    SVE_LOG_FILE                Also log to this file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from sve_cli import __version__
from sve_cli.commands import keygen, sign, verify
from sve_cli.config import DEFAULT_CONFIG_FILE, get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

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
        prog="sve",
        description="Sign messages with an embedded Ed25519 signature and public key, and verify them.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./sve.json or ~/.config/sve/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- keygen command ---
    keygen_parser = subparsers.add_parser(
        "keygen",
        aliases=["gk"],
        help="Generate an Ed25519 key pair",
        description="Generate a key pair and save it as hex text files.",
    )
    keygen_parser.add_argument(
        "--public",
        type=str,
        default=None,
        help="Public key output file (default: pubkey)",
    )
    keygen_parser.add_argument(
        "--private",
        type=str,
        default=None,
        help="Private key output file (default: privkey)",
    )
    keygen_parser.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite existing key files",
    )
    keygen_parser.set_defaults(func=keygen.keygen_cmd)

    # --- sign command ---
    sign_parser = subparsers.add_parser(
        "sign",
        aliases=["s"],
        help="Sign a message",
        description="Read a message, embed the public key and signature headers, and write it out.",
    )
    sign_parser.add_argument(
        "key_file",
        type=str,
        nargs="?",
        default=None,
        help="Private key file (default: privkey)",
    )
    sign_parser.add_argument(
        "--in", "-i",
        dest="input",
        type=str,
        default=None,
        help="Read the message from this file instead of stdin",
    )
    sign_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the signed message to this file instead of stdout",
    )
    sign_parser.add_argument(
        "--line-endings",
        type=str,
        choices=["normalize", "preserve_crlf"],
        default=None,
        help="Line-ending policy (default: from config or normalize)",
    )
    sign_parser.add_argument(
        "--dialect",
        type=str,
        choices=["standard", "legacy"],
        default=None,
        help="Header names to write (default: from config or standard)",
    )
    sign_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Raise errors with a traceback",
    )
    sign_parser.set_defaults(func=sign.sign_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        aliases=["v"],
        help="Verify a signed message",
        description="Verify the signature embedded in a message.",
    )
    verify_parser.add_argument(
        "--public-key", "-k",
        type=str,
        default=None,
        help="Verify against this public key file instead of the embedded header",
    )
    verify_parser.add_argument(
        "--in", "-i",
        dest="input",
        type=str,
        default=None,
        help="Read the message from this file instead of stdin",
    )
    verify_parser.add_argument(
        "--dialect",
        type=str,
        choices=["standard", "legacy"],
        default=None,
        help="Header names to read (default: from config or standard)",
    )
    verify_parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Exit with status 2 when the signature is not valid",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include detailed checks in output",
    )
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
        default=DEFAULT_CONFIG_FILE,
        help=f"Path for config file (default: {DEFAULT_CONFIG_FILE})",
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
        print("You can also use environment variables (SVE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: sve config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed in strict mode)
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
    log_level = str(args.log_level or config.log_level or "WARNING")
    try:
        setup_logging(level=log_level, log_file=config.log_file)
    except OSError as e:
        print(f"Error configuring logging: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False) or log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
