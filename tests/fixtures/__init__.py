"""
Test fixtures package for sve tests.

Provides fixed RFC 8032 key pairs and message factories.

Usage:
    from fixtures import make_test_keypair, make_signed

    def test_something():
        result = make_signed(b"hello\\n")
"""

from .common import (
    RFC8032_TEST1_PUBLIC_HEX,
    RFC8032_TEST1_SEED_HEX,
    RFC8032_TEST1_SIGNATURE_HEX,
    RFC8032_TEST2_MESSAGE,
    RFC8032_TEST2_PUBLIC_HEX,
    RFC8032_TEST2_SEED_HEX,
    RFC8032_TEST2_SIGNATURE_HEX,
    make_other_keypair,
    make_raw_message,
    make_signed,
    make_test_keypair,
)

__all__ = [
    "RFC8032_TEST1_PUBLIC_HEX",
    "RFC8032_TEST1_SEED_HEX",
    "RFC8032_TEST1_SIGNATURE_HEX",
    "RFC8032_TEST2_MESSAGE",
    "RFC8032_TEST2_PUBLIC_HEX",
    "RFC8032_TEST2_SEED_HEX",
    "RFC8032_TEST2_SIGNATURE_HEX",
    "make_other_keypair",
    "make_raw_message",
    "make_signed",
    "make_test_keypair",
]
