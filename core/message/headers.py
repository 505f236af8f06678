"""
Header Codec

Serializes and parses the typed header lines that carry the public key
and the signature:

    Signature: <first 64 hex chars>\\r\\n
     <remaining hex chars>\\r\\n
    Public-Key: <hex public key>\\r\\n

A folded value continues on the following line(s) starting with a
space; decoding strips the leading whitespace and concatenates the
pieces with no separator.

Header blocks are handled as latin-1 text so that every byte maps to
exactly one character and values re-encode to the original bytes.
"""
from __future__ import annotations

from dataclasses import dataclass

from core.crypto.signatures import SIGNATURE_SIZE
from core.schemas.errors import MessageFormatException


HEADER_ENCODING = "latin-1"
HEADER_SEPARATOR = ": "
LINE_END = "\r\n"
FOLD_PREFIX = " "

# Two hex chars per byte; the fold point sits halfway through the signature
SIGNATURE_HEX_LENGTH = 2 * SIGNATURE_SIZE
SIGNATURE_FOLD_OFFSET = SIGNATURE_HEX_LENGTH // 2


@dataclass(frozen=True)
class HeaderDialect:
    """The pair of header names a message is written with."""
    name: str
    public_key: str
    signature: str

    @property
    def names(self) -> tuple[str, str]:
        return (self.signature, self.public_key)


STANDARD = HeaderDialect(name="standard", public_key="Public-Key", signature="Signature")
LEGACY = HeaderDialect(name="legacy", public_key="X-Ed25519-Pub", signature="X-Ed25519-Sig")

DIALECTS: dict[str, HeaderDialect] = {
    STANDARD.name: STANDARD,
    LEGACY.name: LEGACY,
}


def get_dialect(name: str | HeaderDialect) -> HeaderDialect:
    """Look up a dialect by name ("standard" or "legacy")."""
    if isinstance(name, HeaderDialect):
        return name
    try:
        return DIALECTS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown header dialect: {name!r} (expected one of {sorted(DIALECTS)})"
        ) from None


@dataclass(frozen=True)
class Header:
    name: str
    value: str


# =============================================================================
# Encoding
# =============================================================================

def render_header(name: str, value: str) -> bytes:
    """Render a single unfolded header line, CRLF-terminated."""
    return f"{name}{HEADER_SEPARATOR}{value}{LINE_END}".encode(HEADER_ENCODING)


def render_folded_header(name: str, value: str, offset: int) -> bytes:
    """
    Render a header whose value is split at offset onto one continuation line.

    Values no longer than offset are emitted unfolded.
    """
    if len(value) <= offset:
        return render_header(name, value)
    first, rest = value[:offset], value[offset:]
    return (
        f"{name}{HEADER_SEPARATOR}{first}{LINE_END}"
        f"{FOLD_PREFIX}{rest}{LINE_END}"
    ).encode(HEADER_ENCODING)


def render_public_key_header(public_key_hex: str, dialect: HeaderDialect = STANDARD) -> bytes:
    """Render the public key header line."""
    if not public_key_hex:
        raise ValueError("Public key value must not be empty")
    return render_header(dialect.public_key, public_key_hex)


def render_signature_header(signature_hex: str, dialect: HeaderDialect = STANDARD) -> bytes:
    """Render the signature header folded at SIGNATURE_FOLD_OFFSET."""
    if not signature_hex:
        raise ValueError("Signature value must not be empty")
    return render_folded_header(dialect.signature, signature_hex, SIGNATURE_FOLD_OFFSET)


# =============================================================================
# Decoding
# =============================================================================

def _match_header(line: str, names: tuple[str, ...]) -> Header | None:
    for name in names:
        prefix = name + HEADER_SEPARATOR
        if line.startswith(prefix):
            return Header(name=name, value=line[len(prefix):])
    return None


def parse_headers(block: bytes | str, dialect: HeaderDialect = STANDARD) -> tuple[Header, ...]:
    """
    Decode the recognized headers of a header block, in order.

    Scanning stops at the first blank line. Lines that are neither a
    recognized header nor a continuation of one are ignored.
    """
    if isinstance(block, bytes):
        block = block.decode(HEADER_ENCODING)

    lines = block.split(LINE_END)
    headers: list[Header] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line == "":
            break

        header = _match_header(line, dialect.names)
        i += 1
        if header is None:
            continue

        value = header.value
        while i < len(lines) and lines[i].startswith(FOLD_PREFIX):
            value += lines[i].strip()
            i += 1
        headers.append(Header(name=header.name, value=value))

    return tuple(headers)


def get_header_values(headers: tuple[Header, ...], name: str) -> list[str]:
    """All values of the named header, in message order."""
    return [h.value for h in headers if h.name == name]


def require_header(headers: tuple[Header, ...], name: str) -> str:
    """
    Return the first value of a mandatory header.

    Raises:
        MessageFormatException: If the header is absent or its value is empty
    """
    values = get_header_values(headers, name)
    if not values:
        raise MessageFormatException(
            f"Invalid message format: missing {name} header",
            header=name,
        )
    value = values[0].strip()
    if not value:
        raise MessageFormatException(
            f"Invalid message format: empty {name} header",
            header=name,
        )
    return value


__all__ = [
    "HeaderDialect",
    "Header",
    "STANDARD",
    "LEGACY",
    "DIALECTS",
    "SIGNATURE_FOLD_OFFSET",
    "get_dialect",
    "render_header",
    "render_folded_header",
    "render_public_key_header",
    "render_signature_header",
    "parse_headers",
    "get_header_values",
    "require_header",
]
