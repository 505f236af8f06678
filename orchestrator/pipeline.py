"""
Sign / Verify Pipelines

Composes the line canonicalizer, header codec, canonical message builder
and signature engine into the two end-to-end flows:

    sign:   raw -> normalize -> +Public-Key -> payload -> sign -> +Signature
    verify: decorated -> split -> trim body -> headers -> payload -> verify

Each run works on a fully read buffer; nothing is shared between runs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.config.runtime import KeySource, RuntimeConfig
from core.crypto.encoding import decode_hex, encode_hex
from core.crypto.signatures import (
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    derive_public_key,
    sign,
    verify,
)
from core.message.canonical import (
    build_signing_message,
    canonicalize_message,
    canonicalize_parsed,
    parse_message,
)
from core.message.headers import render_signature_header, require_header
from core.message.lines import normalize_line_endings, trim_trailing_blank_lines
from core.schemas.errors import ErrorCodes, KeyFileException, MessageFormatException
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


# =============================================================================
# Sign Result
# =============================================================================

@dataclass(frozen=True)
class SignResult:
    """Output of one sign run."""
    message: bytes  # Signature header + Public-Key header + blank line + body
    payload: bytes  # exact bytes that were signed
    signature_hex: str
    public_key_hex: str


# =============================================================================
# Sign Pipeline
# =============================================================================

class SignPipeline:
    """
    Produces a self-verifying message from a raw body.

    Usage:
        pipeline = SignPipeline()
        result = pipeline.run(private_key, b"hello\\n")
        sys.stdout.buffer.write(result.message)
    """

    def __init__(self, config: Optional[RuntimeConfig] = None):
        self.config = config or RuntimeConfig()

    def prepare_body(self, raw: bytes) -> bytes:
        """Normalize line endings and drop trailing blank lines."""
        body = normalize_line_endings(raw, self.config.line_ending_policy)
        return trim_trailing_blank_lines(body)

    def run(self, private_key: bytes, raw_message: bytes) -> SignResult:
        """
        Sign raw_message with private_key.

        Raises:
            EncodingException: If the private key is malformed
        """
        dialect = self.config.header_dialect
        public_key_hex = encode_hex(derive_public_key(private_key))

        body = self.prepare_body(raw_message)
        message_with_key = build_signing_message(body, public_key_hex, dialect)

        payload = canonicalize_message(message_with_key, dialect)
        logger.debug(f"Signing payload of {len(payload)} bytes (body {len(body)} bytes)")

        signature_hex = encode_hex(sign(private_key, payload))
        message = render_signature_header(signature_hex, dialect) + message_with_key

        logger.info(f"Signed message with public key {public_key_hex[:16]}...")
        return SignResult(
            message=message,
            payload=payload,
            signature_hex=signature_hex,
            public_key_hex=public_key_hex,
        )


# =============================================================================
# Verify Pipeline
# =============================================================================

class VerifyPipeline:
    """
    Verifies a decorated message.

    An invalid signature yields VerificationResult(ok=False); structurally
    malformed input (missing separator or header, undecodable hex) raises
    an SveException subclass.
    """

    def __init__(self, config: Optional[RuntimeConfig] = None):
        self.config = config or RuntimeConfig()

    def _select_public_key(
        self,
        embedded_hex: Optional[str],
        public_key: Optional[bytes],
        checks: list[CheckResult],
    ) -> bytes:
        if self.config.key_source is KeySource.EMBEDDED:
            if embedded_hex is None:
                raise MessageFormatException(
                    "Invalid message format: missing "
                    f"{self.config.header_dialect.public_key} header",
                    header=self.config.header_dialect.public_key,
                )
            checks.append(CheckResult.passed("public_key_header", "Public key header present"))
            return decode_hex(embedded_hex, what="public key", expected_size=PUBLIC_KEY_SIZE)

        if public_key is None:
            raise KeyFileException("key_source is 'file' but no public key was supplied")

        if embedded_hex is not None and embedded_hex.strip().lower() != encode_hex(public_key):
            logger.warning("Embedded public key differs from the supplied public key file")
            checks.append(CheckResult.warning(
                "public_key_match",
                "Embedded public key differs from the supplied key",
                details={"embedded": embedded_hex.strip()},
            ))
        else:
            checks.append(CheckResult.passed("public_key_match", "Using supplied public key"))
        return public_key

    def run(self, message: bytes, public_key: Optional[bytes] = None) -> VerificationResult:
        """
        Verify the signature embedded in message.

        Args:
            message: Full decorated message bytes
            public_key: Raw public key, required when key_source is 'file'

        Raises:
            MessageFormatException: Empty input, missing separator or header
            KeyFileException: If key_source is 'file' and no public key was supplied
            EncodingException: Undecodable key or signature hex
        """
        if not message:
            raise MessageFormatException("Empty input: no message to verify")

        dialect = self.config.header_dialect
        parsed = parse_message(message, dialect, trim_body=True)

        signature_hex = require_header(parsed.headers, dialect.signature)
        checks: list[CheckResult] = [
            CheckResult.passed("signature_header", "Signature header present"),
        ]

        embedded_hex = parsed.get(dialect.public_key)
        key = self._select_public_key(embedded_hex, public_key, checks)
        signature = decode_hex(signature_hex, what="signature", expected_size=SIGNATURE_SIZE)

        payload = canonicalize_parsed(parsed, dialect)
        logger.debug(f"Verifying payload of {len(payload)} bytes")

        result = VerificationResult(
            ok=True,
            checks=checks,
            public_key_hex=encode_hex(key),
            signature_hex=signature_hex,
        )
        if verify(key, payload, signature):
            result.add_check(CheckResult.passed("signature_valid", "Signature is valid"))
            logger.info("Signature verified")
        else:
            result.add_check(CheckResult.failed(
                "signature_valid",
                "Signature is not valid",
                details={"code": ErrorCodes.VERIFICATION_FAILED},
            ))
            logger.warning("Signature verification failed")
        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def sign_message(
    private_key: bytes,
    raw_message: bytes,
    config: Optional[RuntimeConfig] = None,
) -> bytes:
    """Sign raw_message and return the decorated message bytes."""
    return SignPipeline(config).run(private_key, raw_message).message


def verify_message(
    message: bytes,
    public_key: Optional[bytes] = None,
    config: Optional[RuntimeConfig] = None,
) -> bool:
    """Verify a decorated message; True if its signature is valid."""
    return VerifyPipeline(config).run(message, public_key).ok


__all__ = [
    "SignResult",
    "SignPipeline",
    "VerifyPipeline",
    "sign_message",
    "verify_message",
]
