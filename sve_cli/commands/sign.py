"""
CLI Sign Command

Read a message, sign it and write the decorated message:

    Signature: <64 hex>
     <64 hex>
    Public-Key: <64 hex>

    <body, CRLF line endings>

Usage:
    sve sign privkey < message.txt > message.signed
    sve sign privkey --in message.txt --out message.signed
"""

from __future__ import annotations

import dataclasses
import logging
import sys
from argparse import Namespace

from core.crypto.keys import load_private_key
from core.schemas.errors import SveException
from orchestrator.pipeline import SignPipeline
from sve_cli.io import read_message, write_output


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def sign_cmd(args: Namespace) -> int:
    """
    Execute the sign command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    runtime = config.runtime
    if args.line_endings:
        runtime = dataclasses.replace(runtime, line_ending_policy=args.line_endings)
    if args.dialect:
        runtime = dataclasses.replace(runtime, header_dialect=args.dialect)

    key_file = args.key_file or config.private_key_file

    try:
        keypair = load_private_key(key_file)
        raw_message = read_message(args.input)
    except SveException as e:
        if args.debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    result = SignPipeline(runtime).run(keypair.private_key, raw_message)

    try:
        write_output(result.message, args.out)
    except SveException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Wrote signed message ({len(result.message)} bytes)")
    return EXIT_SUCCESS
