"""
SVE CLI

Command-line interface for signing messages with an embedded Ed25519
signature and public key, and verifying them.

Usage:
    python -m sve_cli keygen
    python -m sve_cli sign privkey < message.txt > message.signed
    python -m sve_cli verify < message.signed
"""

__version__ = "0.1.0"
