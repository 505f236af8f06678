"""
Line Canonicalizer

Every line terminator in a signed message is CRLF. Two policies exist
and they are NOT interchangeable: the same input can produce different
bytes, so a signature made under one may fail under the other.

- NORMALIZE: CRLF -> LF, CR -> LF, then LF -> CRLF. Idempotent.
- PRESERVE_CRLF: if any CRLF is present the input is left untouched,
  otherwise it is converted as above. Kept for messages signed by
  older producers.
"""
from __future__ import annotations

from enum import Enum


CR = b"\r"
LF = b"\n"
CRLF = b"\r\n"
BLANK_LINE = CRLF + CRLF


class LineEndingPolicy(str, Enum):
    """How line endings are normalized before signing."""
    NORMALIZE = "normalize"
    PRESERVE_CRLF = "preserve_crlf"


def _to_crlf(data: bytes) -> bytes:
    data = data.replace(CRLF, LF)
    data = data.replace(CR, LF)
    return data.replace(LF, CRLF)


def normalize_line_endings(
    data: bytes,
    policy: LineEndingPolicy = LineEndingPolicy.NORMALIZE,
) -> bytes:
    """
    Convert all line terminators in data to CRLF.

    Args:
        data: Raw message bytes (LF, CR, CRLF or any mixture)
        policy: Normalization policy

    Returns:
        Bytes whose line terminators are CRLF (under PRESERVE_CRLF, mixed
        input containing a CRLF is returned as-is)
    """
    policy = LineEndingPolicy(policy)
    if policy is LineEndingPolicy.PRESERVE_CRLF and CRLF in data:
        return data
    return _to_crlf(data)


def trim_trailing_blank_lines(body: bytes) -> bytes:
    """
    Drop blank CRLF lines from the end of a message body.

    "hello\\r\\n\\r\\n\\r\\n" becomes "hello\\r\\n"; a body made only of
    blank lines becomes empty. The final line's own terminator is kept.
    """
    while body.endswith(BLANK_LINE):
        body = body[:-len(CRLF)]
    if body == CRLF:
        return b""
    return body


__all__ = [
    "CRLF",
    "BLANK_LINE",
    "LineEndingPolicy",
    "normalize_line_endings",
    "trim_trailing_blank_lines",
]
