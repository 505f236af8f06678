"""
Common test fixtures shared by all modules.

Provides:
- Fixed Ed25519 key pairs from RFC 8032 section 7.1 (TEST 1, TEST 2)
- Factories for raw and signed messages
"""

from typing import Optional

from core.config.runtime import RuntimeConfig
from core.crypto.signatures import KeyPair
from orchestrator.pipeline import SignPipeline, SignResult


# =============================================================================
# RFC 8032 Test Vectors
# =============================================================================

RFC8032_TEST1_SEED_HEX = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC8032_TEST1_PUBLIC_HEX = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
RFC8032_TEST1_SIGNATURE_HEX = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e06522490155"
    "5fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)

RFC8032_TEST2_SEED_HEX = "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb"
RFC8032_TEST2_PUBLIC_HEX = "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c"
RFC8032_TEST2_MESSAGE = bytes.fromhex("72")
RFC8032_TEST2_SIGNATURE_HEX = (
    "92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da"
    "085ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00"
)


def make_test_keypair() -> KeyPair:
    """The RFC 8032 TEST 1 key pair in the 64-byte private key layout."""
    public_key = bytes.fromhex(RFC8032_TEST1_PUBLIC_HEX)
    return KeyPair(
        public_key=public_key,
        private_key=bytes.fromhex(RFC8032_TEST1_SEED_HEX) + public_key,
    )


def make_other_keypair() -> KeyPair:
    """The RFC 8032 TEST 2 key pair, for wrong-key scenarios."""
    public_key = bytes.fromhex(RFC8032_TEST2_PUBLIC_HEX)
    return KeyPair(
        public_key=public_key,
        private_key=bytes.fromhex(RFC8032_TEST2_SEED_HEX) + public_key,
    )


# =============================================================================
# Message Factories
# =============================================================================

def make_raw_message(lines: Optional[list[str]] = None, newline: str = "\n") -> bytes:
    """Create a raw (unsigned) message body joined with the given newline."""
    if lines is None:
        lines = [
            "Subject: quarterly report",
            "",
            "Numbers are attached.",
            "-- ",
            "ops",
        ]
    return (newline.join(lines) + newline).encode("utf-8")


def make_signed(
    body: bytes = b"hello\n",
    keypair: Optional[KeyPair] = None,
    config: Optional[RuntimeConfig] = None,
) -> SignResult:
    """Sign body with the test key pair (or the given one)."""
    keypair = keypair or make_test_keypair()
    return SignPipeline(config).run(keypair.private_key, body)
