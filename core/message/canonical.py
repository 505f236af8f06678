"""
Canonical Message Builder

Reduces a header+body message to the exact bytes that are signed and
verified:

    payload = CRLF.join(<every public key header value>) + CRLF + body

The signature header never takes part (it cannot sign itself); the
public key header always does, so the signature commits to the key
named in the message.

CRITICAL: the sign side and the verify side MUST derive byte-identical
payloads from differently constructed messages. Both go through
canonicalize_message().
"""
from __future__ import annotations

from dataclasses import dataclass

from core.message.headers import (
    HEADER_ENCODING,
    STANDARD,
    Header,
    HeaderDialect,
    get_header_values,
    parse_headers,
    render_public_key_header,
)
from core.message.lines import BLANK_LINE, CRLF, trim_trailing_blank_lines
from core.schemas.errors import MessageFormatException


@dataclass(frozen=True)
class ParsedMessage:
    """A message split at its first blank line, with decoded headers."""
    header_block: bytes
    headers: tuple[Header, ...]
    body: bytes

    def get(self, name: str) -> str | None:
        values = self.get_all(name)
        return values[0] if values else None

    def get_all(self, name: str) -> list[str]:
        return get_header_values(self.headers, name)


def split_message(message: bytes) -> tuple[bytes, bytes]:
    """
    Split a message at the first blank line.

    Returns:
        (header_block, body); the header block has no trailing CRLF

    Raises:
        MessageFormatException: If there is no header/body separator
    """
    header_block, sep, body = message.partition(BLANK_LINE)
    if not sep:
        raise MessageFormatException(
            "Invalid message format: missing header/body separator (lines must end with CRLF)"
        )
    return header_block, body


def parse_message(
    message: bytes,
    dialect: HeaderDialect = STANDARD,
    trim_body: bool = False,
) -> ParsedMessage:
    """
    Split a message and decode its header block.

    Args:
        message: Full message bytes (CRLF line endings)
        dialect: Header names to recognize
        trim_body: Drop trailing blank lines from the body

    Raises:
        MessageFormatException: If there is no header/body separator
    """
    header_block, body = split_message(message)
    if trim_body:
        body = trim_trailing_blank_lines(body)
    return ParsedMessage(
        header_block=header_block,
        headers=parse_headers(header_block, dialect),
        body=body,
    )


def build_canonical_payload(
    headers: tuple[Header, ...],
    body: bytes,
    dialect: HeaderDialect = STANDARD,
) -> bytes:
    """
    Build the sign/verify input from decoded headers and a body.

    Zero or several public key headers are joined as found.
    """
    values = get_header_values(headers, dialect.public_key)
    prefix = "\r\n".join(values).encode(HEADER_ENCODING)
    return prefix + CRLF + body


def build_signing_message(
    body: bytes,
    public_key_hex: str,
    dialect: HeaderDialect = STANDARD,
) -> bytes:
    """Prepend the public key header and the blank separator line to a body."""
    return render_public_key_header(public_key_hex, dialect) + CRLF + body


def canonicalize_message(message: bytes, dialect: HeaderDialect = STANDARD) -> bytes:
    """Split, decode and reduce a full message to its canonical payload."""
    parsed = parse_message(message, dialect)
    return build_canonical_payload(parsed.headers, parsed.body, dialect)


def canonicalize_parsed(parsed: ParsedMessage, dialect: HeaderDialect = STANDARD) -> bytes:
    """Reduce an already parsed message to its canonical payload."""
    return build_canonical_payload(parsed.headers, parsed.body, dialect)


__all__ = [
    "ParsedMessage",
    "split_message",
    "parse_message",
    "build_canonical_payload",
    "build_signing_message",
    "canonicalize_message",
    "canonicalize_parsed",
]
