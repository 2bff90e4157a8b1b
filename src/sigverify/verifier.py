"""
Runs one verification request through the decoder and the crypto backend.
Backend errors are turned into a Failure outcome and never escape verify().
"""
from dataclasses import dataclass
from typing import Callable, Optional, Union

from sigverify.decode_helper import decode
from sigverify.log_helper import get_logger
from sigverify.signature_helper import SignatureResult, signature_verify

log = get_logger("verifier")

VerifyFn = Callable[[bytes, bytes, str], SignatureResult]


@dataclass(frozen=True)
class VerificationRequest:
    message: str
    signature: str
    signer: str
    index: Optional[int] = None

    def item(self) -> list[str]:
        return [self.message, self.signature, self.signer]


@dataclass(frozen=True)
class Success:
    is_valid: bool
    scheme: str
    public_key_hex: str


@dataclass(frozen=True)
class Failure:
    error: str


VerificationOutcome = Union[Success, Failure]


def verify(request: VerificationRequest, verify_fn: VerifyFn = signature_verify) -> VerificationOutcome:
    """
    Verify a single request.

    The message and signature are decoded (hex, base64, raw text); the signer
    is handed to the backend unchanged.

    Args:
        request: The message/signature/signer triplet
        verify_fn: Backend to call, signature_verify by default

    Returns:
        Success with the normalised result, or Failure with the error text
    """
    message = decode(request.message)
    signature = decode(request.signature)

    try:
        result = verify_fn(message, signature, request.signer)
        public_key_hex = "0x" + bytes(result.public_key).hex()
    except Exception as e:
        log.info("Verification of item %s failed: %s", request.index, e)
        return Failure(error=str(e) or type(e).__name__)

    return Success(is_valid=bool(result.is_valid), scheme=result.crypto, public_key_hex=public_key_hex)
