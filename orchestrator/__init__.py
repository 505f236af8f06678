"""
Sign / Verify Orchestration

Public API:
- SignPipeline: raw message -> self-verifying decorated message
- VerifyPipeline: decorated message -> VerificationResult
- SignResult: output of one sign run
- sign_message / verify_message: one-call helpers
"""

from orchestrator.pipeline import (
    SignPipeline,
    SignResult,
    VerifyPipeline,
    sign_message,
    verify_message,
)

__all__ = [
    "SignPipeline",
    "SignResult",
    "VerifyPipeline",
    "sign_message",
    "verify_message",
]
