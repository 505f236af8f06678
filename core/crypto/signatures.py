"""
Ed25519 Signature Engine

Thin wrapper over the Ed25519 primitive from `cryptography`.

Key layout (RFC 8032 / Go crypto/ed25519 compatible):
- public key: 32 bytes
- private key: 64 bytes = 32-byte seed || 32-byte public key
- signature: 64 bytes

verify() answers True/False for well-formed input; malformed key or
signature material raises EncodingException instead.
"""
from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from core.crypto.encoding import encode_hex
from core.schemas.errors import EncodingException


SEED_SIZE = 32
PUBLIC_KEY_SIZE = 32
PRIVATE_KEY_SIZE = SEED_SIZE + PUBLIC_KEY_SIZE
SIGNATURE_SIZE = 64


@dataclass(frozen=True)
class KeyPair:
    public_key: bytes
    private_key: bytes

    @property
    def public_key_hex(self) -> str:
        return encode_hex(self.public_key)

    @property
    def private_key_hex(self) -> str:
        return encode_hex(self.private_key)


def _raw_public_bytes(key: ed25519.Ed25519PrivateKey) -> bytes:
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def _load_private_key(private_key: bytes) -> ed25519.Ed25519PrivateKey:
    """
    Load a 64-byte (seed || public) or 32-byte (seed) private key.

    Raises:
        EncodingException: On wrong size, or if the public half does not
            belong to the seed.
    """
    if len(private_key) not in (SEED_SIZE, PRIVATE_KEY_SIZE):
        raise EncodingException(
            f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(private_key)}",
            field_name="private_key",
        )

    key = ed25519.Ed25519PrivateKey.from_private_bytes(private_key[:SEED_SIZE])

    if len(private_key) == PRIVATE_KEY_SIZE and _raw_public_bytes(key) != private_key[SEED_SIZE:]:
        raise EncodingException(
            "Private key is inconsistent: public half does not match seed",
            field_name="private_key",
        )
    return key


def _load_public_key(public_key: bytes) -> ed25519.Ed25519PublicKey:
    if len(public_key) != PUBLIC_KEY_SIZE:
        raise EncodingException(
            f"Public key must be {PUBLIC_KEY_SIZE} bytes, got {len(public_key)}",
            field_name="public_key",
        )
    try:
        return ed25519.Ed25519PublicKey.from_public_bytes(public_key)
    except ValueError as e:
        raise EncodingException(f"Invalid public key: {e}", field_name="public_key") from e


def generate_keypair() -> KeyPair:
    """Generate a fresh Ed25519 key pair in the 64-byte private key layout."""
    key = ed25519.Ed25519PrivateKey.generate()
    seed = key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_key = _raw_public_bytes(key)
    return KeyPair(public_key=public_key, private_key=seed + public_key)


def derive_public_key(private_key: bytes) -> bytes:
    """
    Return the public key belonging to a private key.

    For the 64-byte layout this is the trailing 32 bytes; a bare 32-byte
    seed is expanded through the primitive.
    """
    key = _load_private_key(private_key)
    if len(private_key) == PRIVATE_KEY_SIZE:
        return private_key[SEED_SIZE:]
    return _raw_public_bytes(key)


def keypair_from_private_key(private_key: bytes) -> KeyPair:
    """Build a KeyPair (always in the 64-byte layout) from stored private key bytes."""
    public_key = derive_public_key(private_key)
    return KeyPair(public_key=public_key, private_key=private_key[:SEED_SIZE] + public_key)


def sign(private_key: bytes, payload: bytes) -> bytes:
    """
    Sign payload with an Ed25519 private key.

    Args:
        private_key: 64-byte (seed || public) or 32-byte seed
        payload: Canonical payload bytes

    Returns:
        64-byte signature
    """
    return _load_private_key(private_key).sign(payload)


def verify(public_key: bytes, payload: bytes, signature: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Returns:
        True if the signature is valid for payload under public_key, else False

    Raises:
        EncodingException: If the public key or signature has the wrong size
    """
    if len(signature) != SIGNATURE_SIZE:
        raise EncodingException(
            f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}",
            field_name="signature",
        )

    key = _load_public_key(public_key)
    try:
        key.verify(signature, payload)
    except InvalidSignature:
        return False
    return True


__all__ = [
    "SEED_SIZE",
    "PUBLIC_KEY_SIZE",
    "PRIVATE_KEY_SIZE",
    "SIGNATURE_SIZE",
    "KeyPair",
    "generate_keypair",
    "derive_public_key",
    "keypair_from_private_key",
    "sign",
    "verify",
]
