"""
Hex Encoding Utilities
Hex encoding/decoding for keys and signatures.

This module provides:
- Lowercase hex encoding of raw bytes
- Strict hex decoding with optional size check

Notes:
- Key files are hex ASCII text, usually with a trailing newline;
  surrounding whitespace is stripped before decoding
- Only surrounding whitespace is stripped; whitespace inside the value
  is rejected
- Decode failures raise EncodingException, never a bare ValueError
"""
from __future__ import annotations

import binascii

from core.schemas.errors import EncodingException


def encode_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string (no prefix).

    Example:
        >>> encode_hex(bytes.fromhex("deadbeef"))
        'deadbeef'
    """
    return data.hex()


def decode_hex(text: str | bytes, what: str = "value", expected_size: int | None = None) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    Args:
        text: Hex string (str or ASCII bytes), surrounding whitespace allowed
        what: Name of the decoded item, used in error messages
        expected_size: If given, the decoded length in bytes must match

    Returns:
        Decoded bytes

    Raises:
        EncodingException: If the text is not valid hex, has odd length,
                           or decodes to the wrong number of bytes

    Example:
        >>> decode_hex("deadbeef\\n").hex()
        'deadbeef'
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError as e:
            raise EncodingException(
                f"Failed to decode {what}: not ASCII hex",
                field_name=what,
            ) from e

    hex_content = text.strip()

    if len(hex_content) % 2 != 0:
        raise EncodingException(
            f"Failed to decode {what}: odd-length hex string ({len(hex_content)} chars)",
            field_name=what,
        )

    try:
        data = binascii.unhexlify(hex_content)
    except (binascii.Error, ValueError) as e:
        raise EncodingException(
            f"Failed to decode {what}: {e}",
            field_name=what,
        ) from e

    if expected_size is not None and len(data) != expected_size:
        raise EncodingException(
            f"Failed to decode {what}: expected {expected_size} bytes, got {len(data)}",
            field_name=what,
            details={"expected_size": expected_size, "actual_size": len(data)},
        )

    return data


__all__ = [
    "encode_hex",
    "decode_hex",
]
