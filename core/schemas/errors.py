"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for signing and verification.
Defines both a Pydantic model for structured error reporting
and Python exceptions for control flow.

Taxonomy:
    1. I/O errors       - key file or input unreadable       (KeyFileException)
    2. Encoding errors  - hex decode / key size failures     (EncodingException)
    3. Format errors    - missing separator or header        (MessageFormatException)
    4. Verification     - well-formed input, bad signature   (a result, not an exception)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    IO_ERROR = "IO_ERROR"
    ENCODING_ERROR = "ENCODING_ERROR"
    FORMAT_ERROR = "FORMAT_ERROR"
    VERIFICATION_FAILED = "VERIFICATION_FAILED"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class SveError(BaseModel):
    """
    Error model for structured error reporting.

    Logged by the CLI when a verify run is aborted.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.FORMAT_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SveException(Exception):
    """
    Base exception for everything that prevents a sign or verify attempt.

    A signature that simply does not verify is NOT an exception.
    """

    def __init__(
        self,
        message: str,
        code: str = "SVE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> SveError:
        """Convert this exception to a SveError model."""
        return SveError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class KeyFileException(SveException):
    """Exception raised when a key file or the input cannot be read or written."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.IO_ERROR,
            details=full_details,
        )


class EncodingException(SveException):
    """Exception raised when hex material cannot be decoded into a key or signature."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_name:
            full_details["field"] = field_name
        super().__init__(
            message=message,
            code=ErrorCodes.ENCODING_ERROR,
            details=full_details,
        )


class MessageFormatException(SveException):
    """Exception raised when a message was never produced by the sign pipeline."""

    def __init__(
        self,
        message: str,
        header: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if header:
            full_details["header"] = header
        super().__init__(
            message=message,
            code=ErrorCodes.FORMAT_ERROR,
            details=full_details,
        )
