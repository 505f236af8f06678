"""
Line Canonicalizer Unit Tests
Tests for core/message/lines.py

Tests:
- LF, CR, CRLF and mixed input all become CRLF
- normalize policy is idempotent
- preserve_crlf policy leaves CRLF-bearing input untouched
- trailing blank line trimming
"""
import pytest

from core.message.lines import (
    LineEndingPolicy,
    normalize_line_endings,
    trim_trailing_blank_lines,
)


class TestNormalizePolicy:
    """Tests for the default NORMALIZE policy."""

    @pytest.mark.parametrize("raw", [
        b"a\nb\n",
        b"a\rb\r",
        b"a\r\nb\r\n",
        b"a\r\nb\n",
        b"a\rb\r\n",
    ])
    def test_all_terminators_become_crlf(self, raw):
        """Every terminator style maps to the same CRLF output."""
        assert normalize_line_endings(raw) == b"a\r\nb\r\n"

    def test_idempotent(self, raw_message):
        """Applying the canonicalizer twice equals applying it once."""
        once = normalize_line_endings(raw_message)
        twice = normalize_line_endings(once)

        assert once == twice

    def test_idempotent_on_mixed_input(self):
        """Idempotence also holds for mixed and bare-CR input."""
        raw = b"x\r\r\ny\n\rz"
        once = normalize_line_endings(raw)

        assert normalize_line_endings(once) == once
        assert b"\n" not in once.replace(b"\r\n", b"")

    def test_blank_lines_preserved(self):
        """Blank lines stay blank lines."""
        assert normalize_line_endings(b"a\n\nb\n") == b"a\r\n\r\nb\r\n"

    def test_no_terminator(self):
        """Input without a newline is returned unchanged."""
        assert normalize_line_endings(b"hello") == b"hello"

    def test_empty(self):
        assert normalize_line_endings(b"") == b""

    def test_accepts_string_policy(self):
        """Policy may be passed as its string value (from config)."""
        assert normalize_line_endings(b"a\n", "normalize") == b"a\r\n"


class TestPreserveCrlfPolicy:
    """Tests for the legacy PRESERVE_CRLF policy."""

    def test_untouched_when_crlf_present(self):
        """Mixed input containing any CRLF is returned as-is."""
        raw = b"a\r\nb\nc\r"
        result = normalize_line_endings(raw, LineEndingPolicy.PRESERVE_CRLF)

        assert result == raw

    def test_converted_when_no_crlf(self):
        """LF-only input is converted like the normalize policy."""
        result = normalize_line_endings(b"a\nb\n", LineEndingPolicy.PRESERVE_CRLF)

        assert result == b"a\r\nb\r\n"

    def test_policies_differ_on_mixed_input(self):
        """The two policies are not interchangeable."""
        raw = b"a\r\nb\n"

        assert (
            normalize_line_endings(raw, LineEndingPolicy.NORMALIZE)
            != normalize_line_endings(raw, LineEndingPolicy.PRESERVE_CRLF)
        )


class TestTrimTrailingBlankLines:
    """Tests for trim_trailing_blank_lines()."""

    def test_repeated_blank_lines_removed(self):
        assert trim_trailing_blank_lines(b"hello\r\n\r\n\r\n") == b"hello\r\n"

    def test_last_line_terminator_kept(self):
        assert trim_trailing_blank_lines(b"hello\r\n") == b"hello\r\n"

    def test_unterminated_body_unchanged(self):
        assert trim_trailing_blank_lines(b"hello") == b"hello"

    def test_only_blank_lines_becomes_empty(self):
        assert trim_trailing_blank_lines(b"\r\n\r\n\r\n") == b""
        assert trim_trailing_blank_lines(b"\r\n") == b""

    def test_inner_blank_lines_kept(self):
        assert trim_trailing_blank_lines(b"a\r\n\r\nb\r\n\r\n") == b"a\r\n\r\nb\r\n"

    def test_idempotent(self):
        body = b"x\r\n\r\n"
        assert trim_trailing_blank_lines(trim_trailing_blank_lines(body)) == trim_trailing_blank_lines(body)
