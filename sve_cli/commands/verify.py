"""
CLI Verify Command

Verify a decorated message read from a pipe or a file.

- Embedded mode (default): the public key comes from the Public-Key header
- File mode (--public-key PATH): the public key comes from PATH

An invalid signature is a normal outcome ("Signature is not valid.",
exit 0, or exit 2 with --strict). Malformed input exits 1.

Usage:
    sve verify < message.signed [--json] [--strict]
    sve verify --public-key pubkey --in message.signed
"""

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from typing import Any

from core.config.runtime import KeySource
from core.crypto.keys import load_public_key
from core.schemas.errors import SveException
from core.schemas.verification import VerificationResult
from orchestrator.pipeline import VerifyPipeline
from sve_cli.io import InteractiveInputError, read_message


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

USAGE = "Usage: sve verify < message"


@dataclass
class VerifySummary:
    """Summary of message verification for CLI output."""
    valid: bool = False
    key_source: str = ""
    public_key: str = ""
    checks: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["checks"]:
            del d["checks"]
        if not d["errors"]:
            del d["errors"]
        return d


def build_summary(result: VerificationResult, key_source: KeySource, debug: bool = False) -> VerifySummary:
    """Build a VerifySummary from a verification result."""
    summary = VerifySummary(
        valid=result.ok,
        key_source=key_source.value,
        public_key=result.public_key_hex,
        errors=result.get_error_messages(),
    )
    if debug:
        summary.checks = [
            {"check_id": c.check_id, "ok": c.ok, "severity": c.severity, "message": c.message}
            for c in result.checks
        ]
    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    if summary.valid:
        print("Signature is valid.")
    else:
        print("Signature is not valid.")

    for check in summary.checks:
        status = "✓" if check["ok"] else "✗"
        print(f"  {status} {check['check_id']}: {check['message']}")


def print_summary_json(summary: VerifySummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    runtime = config.runtime
    if args.public_key:
        runtime = dataclasses.replace(runtime, key_source=KeySource.FILE)
    if args.dialect:
        runtime = dataclasses.replace(runtime, header_dialect=args.dialect)

    strict = args.strict or config.strict_mode
    output_json = args.json or config.default_output_format == "json"

    public_key = None
    try:
        if runtime.key_source is KeySource.FILE:
            public_key = load_public_key(args.public_key or config.public_key_file)
        message = read_message(args.input, require_pipe=True)
    except InteractiveInputError:
        print(USAGE, file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except SveException as e:
        if args.debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        result = VerifyPipeline(runtime).run(message, public_key)
    except SveException as e:
        if args.debug:
            raise
        logger.debug(f"Verification aborted: {e.to_error_model().model_dump()}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = build_summary(result, runtime.key_source, debug=args.debug)
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    if result.ok:
        return EXIT_SUCCESS
    if strict:
        return EXIT_VERIFICATION_FAILED
    return EXIT_SUCCESS
