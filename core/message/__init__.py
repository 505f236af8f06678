"""
Message canonicalization and header embedding.

Public API:
- normalize_line_endings / trim_trailing_blank_lines: line canonicalizer
- render_*_header / parse_headers: header codec
- build_canonical_payload / canonicalize_message: canonical message builder
"""

from .lines import (
    BLANK_LINE,
    CRLF,
    LineEndingPolicy,
    normalize_line_endings,
    trim_trailing_blank_lines,
)
from .headers import (
    DIALECTS,
    LEGACY,
    SIGNATURE_FOLD_OFFSET,
    STANDARD,
    Header,
    HeaderDialect,
    get_dialect,
    get_header_values,
    parse_headers,
    render_folded_header,
    render_header,
    render_public_key_header,
    render_signature_header,
    require_header,
)
from .canonical import (
    ParsedMessage,
    build_canonical_payload,
    build_signing_message,
    canonicalize_message,
    canonicalize_parsed,
    parse_message,
    split_message,
)

__all__ = [
    "BLANK_LINE",
    "CRLF",
    "LineEndingPolicy",
    "normalize_line_endings",
    "trim_trailing_blank_lines",
    "DIALECTS",
    "LEGACY",
    "SIGNATURE_FOLD_OFFSET",
    "STANDARD",
    "Header",
    "HeaderDialect",
    "get_dialect",
    "get_header_values",
    "parse_headers",
    "render_folded_header",
    "render_header",
    "render_public_key_header",
    "render_signature_header",
    "require_header",
    "ParsedMessage",
    "build_canonical_payload",
    "build_signing_message",
    "canonicalize_message",
    "canonicalize_parsed",
    "parse_message",
    "split_message",
]
