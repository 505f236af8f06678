"""
CLI Keygen Command

Generate an Ed25519 key pair and save it as two hex text files.

Usage:
    sve keygen [--public pubkey] [--private privkey] [--force]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from core.crypto.keys import save_keypair
from core.crypto.signatures import generate_keypair
from core.schemas.errors import SveException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def keygen_cmd(args: Namespace) -> int:
    """
    Execute the keygen command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    public_path = args.public or config.public_key_file
    private_path = args.private or config.private_key_file

    keypair = generate_keypair()
    try:
        public_path, private_path = save_keypair(
            keypair,
            public_path=public_path,
            private_path=private_path,
            overwrite=args.force,
        )
    except SveException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(f"Key pair generated and saved in {public_path} and {private_path}")
    return EXIT_SUCCESS
