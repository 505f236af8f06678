"""
CLI Input / Output

Messages are read fully into memory before any cryptographic step and
written as raw bytes (no newline translation).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO

from core.schemas.errors import KeyFileException


class InteractiveInputError(Exception):
    """Standard input is a terminal but a piped message is required."""
    pass


def read_message(path: str | None = None, stdin: BinaryIO | None = None, require_pipe: bool = False) -> bytes:
    """
    Read a whole message from a file or standard input.

    Args:
        path: File to read; standard input when None or "-"
        stdin: Binary stream to use instead of sys.stdin.buffer
        require_pipe: Refuse to read from an interactive terminal

    Raises:
        InteractiveInputError: If require_pipe and stdin is a terminal
        KeyFileException: If the input cannot be read
    """
    if path and path != "-":
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise KeyFileException(f"Failed to read message: {e}", path=path) from e

    stream = stdin if stdin is not None else sys.stdin.buffer
    if require_pipe and stream.isatty():
        raise InteractiveInputError("Refusing to read a message from an interactive terminal")

    try:
        return stream.read()
    except OSError as e:
        raise KeyFileException(f"Failed to read the message from stdin: {e}") from e


def write_output(data: bytes, path: str | None = None, stdout: BinaryIO | None = None) -> None:
    """Write bytes to a file, or to standard output when path is None or "-"."""
    if path and path != "-":
        try:
            Path(path).write_bytes(data)
        except OSError as e:
            raise KeyFileException(f"Failed to write output: {e}", path=path) from e
        return

    stream = stdout if stdout is not None else sys.stdout.buffer
    stream.write(data)
    stream.flush()
