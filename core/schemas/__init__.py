"""
Schemas

Purpose: Export the error taxonomy and verification result models.
This is the main entry point for other modules to import them.
"""

# Error models and exceptions
from .errors import (
    EncodingException,
    ErrorCodes,
    KeyFileException,
    MessageFormatException,
    SveError,
    SveException,
)

# Verification results
from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

__all__ = [
    # Errors
    "EncodingException",
    "ErrorCodes",
    "KeyFileException",
    "MessageFormatException",
    "SveError",
    "SveException",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
]
