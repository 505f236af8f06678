"""
Core cryptographic utilities.

Hex encoding, the Ed25519 signature engine and key file IO.
"""
from .encoding import (
    encode_hex,
    decode_hex,
)
from .signatures import (
    PRIVATE_KEY_SIZE,
    PUBLIC_KEY_SIZE,
    SEED_SIZE,
    SIGNATURE_SIZE,
    KeyPair,
    derive_public_key,
    generate_keypair,
    keypair_from_private_key,
    sign,
    verify,
)
from .keys import (
    load_private_key,
    load_public_key,
    save_keypair,
)

__all__ = [
    "encode_hex",
    "decode_hex",
    "PRIVATE_KEY_SIZE",
    "PUBLIC_KEY_SIZE",
    "SEED_SIZE",
    "SIGNATURE_SIZE",
    "KeyPair",
    "derive_public_key",
    "generate_keypair",
    "keypair_from_private_key",
    "sign",
    "verify",
    "load_private_key",
    "load_public_key",
    "save_keypair",
]
