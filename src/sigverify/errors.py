"""
Error types raised by the signature verification CLI.
Per-item errors are recorded into the batch report; setup errors abort the run.
"""
from typing import Any


class SigVerifyError(Exception):
    """Base error, optionally carrying context for the report."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class UsageError(SigVerifyError):
    pass


class BatchFileNotFoundError(SigVerifyError):
    pass


class BatchFileReadError(SigVerifyError):
    pass


class BatchFormatError(SigVerifyError):
    """Neither the JSON nor the bracket grammar could parse the batch content."""


class ItemShapeError(SigVerifyError):
    """A batch entry is not a (message, signature, signer) triplet."""


class VerificationError(SigVerifyError):
    """The verification backend rejected a request (bad signer, bad signature length)."""
