"""
Key File IO

Key files are hex ASCII text:
- private key file: 128 hex chars (seed || public key)
- public key file: 64 hex chars

Files are read fully and closed before any cryptographic operation.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from core.crypto.encoding import decode_hex
from core.crypto.signatures import KeyPair, PUBLIC_KEY_SIZE, keypair_from_private_key
from core.schemas.errors import KeyFileException


logger = logging.getLogger(__name__)


DEFAULT_PUBLIC_KEY_FILE = "pubkey"
DEFAULT_PRIVATE_KEY_FILE = "privkey"

PUBLIC_KEY_MODE = 0o644
PRIVATE_KEY_MODE = 0o600


def _read_key_text(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="ascii")
    except (OSError, UnicodeDecodeError) as e:
        raise KeyFileException(f"Failed to read {what} file: {e}", path=str(path)) from e


def load_private_key(path: str | Path) -> KeyPair:
    """
    Load a private key file and derive its key pair.

    Raises:
        KeyFileException: If the file cannot be read
        EncodingException: If the content is not a valid private key
    """
    path = Path(path)
    text = _read_key_text(path, "private key")
    keypair = keypair_from_private_key(decode_hex(text, what="private key"))
    logger.debug(f"Loaded private key from {path}")
    return keypair


def load_public_key(path: str | Path) -> bytes:
    """
    Load a standalone public key file.

    Raises:
        KeyFileException: If the file cannot be read
        EncodingException: If the content is not a 32-byte hex key
    """
    path = Path(path)
    text = _read_key_text(path, "public key")
    public_key = decode_hex(text, what="public key", expected_size=PUBLIC_KEY_SIZE)
    logger.debug(f"Loaded public key from {path}")
    return public_key


def _write_key_file(path: Path, text: str, mode: int, overwrite: bool) -> None:
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
    if not overwrite:
        flags |= os.O_EXCL

    try:
        fd = os.open(path, flags, mode)
    except FileExistsError as e:
        raise KeyFileException(f"Key file already exists: {path}", path=str(path)) from e
    except OSError as e:
        raise KeyFileException(f"Failed to create key file: {e}", path=str(path)) from e

    try:
        with os.fdopen(fd, "w", encoding="ascii") as f:
            f.write(text)
        # O_CREAT mode is ignored for files that already existed
        os.chmod(path, mode)
    except OSError as e:
        raise KeyFileException(f"Failed to write key file: {e}", path=str(path)) from e


def save_keypair(
    keypair: KeyPair,
    public_path: str | Path = DEFAULT_PUBLIC_KEY_FILE,
    private_path: str | Path = DEFAULT_PRIVATE_KEY_FILE,
    overwrite: bool = False,
) -> tuple[Path, Path]:
    """
    Write a key pair as two hex text files.

    Args:
        keypair: Key pair to persist
        public_path: Destination of the public key (mode 0644)
        private_path: Destination of the private key (mode 0600)
        overwrite: Replace existing files instead of failing

    Returns:
        (public_path, private_path) as Paths

    Raises:
        KeyFileException: If a file exists (and overwrite is False) or cannot be written
    """
    public_path = Path(public_path)
    private_path = Path(private_path)

    if not overwrite:
        for path in (public_path, private_path):
            if path.exists():
                raise KeyFileException(f"Key file already exists: {path}", path=str(path))

    _write_key_file(private_path, keypair.private_key_hex, PRIVATE_KEY_MODE, overwrite)
    _write_key_file(public_path, keypair.public_key_hex, PUBLIC_KEY_MODE, overwrite)

    logger.info(f"Saved key pair: public={public_path} private={private_path}")
    return public_path, private_path


__all__ = [
    "DEFAULT_PUBLIC_KEY_FILE",
    "DEFAULT_PRIVATE_KEY_FILE",
    "load_private_key",
    "load_public_key",
    "save_keypair",
]
