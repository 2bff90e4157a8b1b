"""
Substrate signature verification backend.
Uses substrate-interface (sr25519) and PyNaCl (libsodium) for Ed25519.
Signers are SS58 addresses or 32-byte public keys (hex/base64).
"""
import base64
import binascii
from dataclasses import dataclass

from nacl.signing import SigningKey, VerifyKey
from nacl.exceptions import BadSignatureError
from scalecodec.utils.ss58 import ss58_decode
from substrateinterface import Keypair, KeypairType

from sigverify.errors import VerificationError
from sigverify.log_helper import get_logger

log = get_logger("signature_helper")

PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64
SS58_FORMAT = 42

# Wallet extensions sign the message wrapped in these markers
BYTES_PREFIX = b"<Bytes>"
BYTES_SUFFIX = b"</Bytes>"

_ready = False


@dataclass(frozen=True)
class SignatureResult:
    is_valid: bool
    crypto: str
    public_key: bytes


def wait_ready() -> None:
    """
    One-time backend initialisation. Signs and verifies a fixed message with
    each scheme so a broken native backend fails before any real check.
    Later calls return immediately.
    """
    global _ready
    if _ready:
        return

    seed = bytes(range(32))
    probe = b"sigverify-ready"

    sr_pair = Keypair.create_from_seed(seed.hex(), ss58_format=SS58_FORMAT, crypto_type=KeypairType.SR25519)
    if not verify_sr25519(sr_pair.public_key, probe, sr_pair.sign(probe)):
        raise RuntimeError("sr25519 backend self-check failed")

    ed_key = SigningKey(seed)
    if not verify_ed25519(bytes(ed_key.verify_key), probe, ed_key.sign(probe).signature):
        raise RuntimeError("ed25519 backend self-check failed")

    log.debug("Crypto backends ready")
    _ready = True


def decode_signer(signer: str) -> bytes:
    """
    Resolve a signer identity to a 32-byte public key.

    Args:
        signer: 0x-prefixed hex public key, SS58 address, or base64 public key

    Returns:
        Public key bytes

    Raises:
        VerificationError: if the signer cannot be decoded to 32 bytes
    """
    public_key = None

    if signer[:2] in ("0x", "0X"):
        try:
            public_key = bytes.fromhex(signer[2:])
        except ValueError:
            raise VerificationError(f"Invalid signer: malformed hex public key {signer!r}")
    else:
        try:
            public_key = bytes.fromhex(ss58_decode(signer))
        except (ValueError, TypeError, IndexError):
            try:
                public_key = base64.b64decode(signer, validate=True)
            except (binascii.Error, ValueError):
                raise VerificationError(
                    f"Invalid signer: {signer!r} is not an SS58 address or public key"
                )

    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise VerificationError(
            f"Invalid signer: expected {PUBLIC_KEY_LENGTH}-byte public key, got {len(public_key)} bytes"
        )
    return public_key


def verify_sr25519(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """Verify an sr25519 signature over the message or its <Bytes> wrapped form."""
    keypair = Keypair(public_key=public_key, ss58_format=SS58_FORMAT, crypto_type=KeypairType.SR25519)
    for data in (message, BYTES_PREFIX + message + BYTES_SUFFIX):
        try:
            if keypair.verify(data, signature):
                return True
        except ValueError:
            # Key bytes that are not a valid ristretto point
            return False
    return False


def verify_ed25519(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Args:
        public_key: 32-byte public key
        message: Message bytes
        signature: 64-byte signature

    Returns:
        True if signature is valid, False otherwise
    """
    verify_key = VerifyKey(public_key)
    for data in (message, BYTES_PREFIX + message + BYTES_SUFFIX):
        try:
            # Raises BadSignatureError on failure
            verify_key.verify(data, signature)
            return True
        except BadSignatureError:
            continue
    return False


SCHEMES = (
    ("sr25519", verify_sr25519),
    ("ed25519", verify_ed25519),
)

# MultiSignature enum index -> scheme; 2 is ECDSA
MULTI_SIGNATURE_TYPES = {
    0: "ed25519",
    1: "sr25519",
}
ECDSA_TYPE = 2


def split_multi_signature(signature: bytes) -> tuple[tuple, bytes]:
    """
    Select the schemes to try for a raw or MultiSignature-encoded signature.

    Args:
        signature: 64-byte raw signature, or 65 bytes with a leading type byte

    Returns:
        (schemes, raw 64-byte signature)

    Raises:
        VerificationError: for ECDSA, an unknown type byte or a bad length
    """
    if len(signature) == SIGNATURE_LENGTH:
        return SCHEMES, signature

    if len(signature) == SIGNATURE_LENGTH + 1:
        type_byte = signature[0]
        if type_byte == ECDSA_TYPE:
            raise VerificationError("ECDSA signatures are not supported")
        crypto = MULTI_SIGNATURE_TYPES.get(type_byte)
        if crypto is None:
            raise VerificationError(f"Invalid MultiSignature type byte {type_byte}")
        schemes = tuple(s for s in SCHEMES if s[0] == crypto)
        return schemes, signature[1:]

    raise VerificationError(
        f"Invalid signature length: expected {SIGNATURE_LENGTH} bytes, got {len(signature)}"
    )


def signature_verify(message: bytes, signature: bytes, signer: str) -> SignatureResult:
    """
    Verify a signature against every supported scheme.

    Args:
        message: Message bytes
        signature: 64-byte signature, or a 65-byte MultiSignature (ed25519/sr25519)
        signer: SS58 address or public key string

    Returns:
        SignatureResult; crypto is "none" when no scheme accepts the signature

    Raises:
        VerificationError: for a malformed signer, signature length or type byte
    """
    public_key = decode_signer(signer)
    schemes, raw_signature = split_multi_signature(signature)

    for crypto, verify_fn in schemes:
        if verify_fn(public_key, message, raw_signature):
            return SignatureResult(is_valid=True, crypto=crypto, public_key=public_key)

    return SignatureResult(is_valid=False, crypto="none", public_key=public_key)
