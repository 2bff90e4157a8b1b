"""
Best-effort decoding of free-form string inputs into bytes.
Tries hex, then strict base64, then falls back to the UTF-8 text itself.
"""
import base64
import binascii
import re

_HEX_RE = re.compile(r"(?:0[xX])?(?:[0-9a-fA-F]{2})*")


def is_hex(value: str) -> bool:
    """
    Check for a hex literal: optional 0x prefix and an even number of hex digits.

    The bare empty string is not hex; the literal "0x" is (empty bytes).
    """
    if not value:
        return False
    return _HEX_RE.fullmatch(value) is not None


def decode(value: str) -> bytes:
    """
    Decode a message, signature or key string into bytes.

    Never raises. Note that plain text which happens to be valid padded
    base64 (e.g. "test") is decoded as base64, not taken literally.

    Args:
        value: hex (0x...), base64, or raw text

    Returns:
        Decoded bytes
    """
    if is_hex(value):
        if value[:2] in ("0x", "0X"):
            value = value[2:]
        return bytes.fromhex(value)

    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        pass

    return value.encode("utf-8", errors="surrogatepass")
