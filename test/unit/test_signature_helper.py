import base64

import pytest

from sigverify import signature_helper
from sigverify.errors import VerificationError
from sigverify.signature_helper import decode_signer, signature_verify, wait_ready

MESSAGE = b"hello substrate"


@pytest.fixture(autouse=True)
def ready():
    wait_ready()


def test_wait_ready_is_idempotent():
    wait_ready()
    wait_ready()
    assert signature_helper._ready is True


def test_decode_signer_forms(sr25519_signer):
    pk = sr25519_signer.public_key
    assert decode_signer(sr25519_signer.address) == pk
    assert decode_signer("0x" + pk.hex()) == pk
    assert decode_signer(base64.b64encode(pk).decode()) == pk


@pytest.mark.parametrize("signer", ["", "0x1234", "0xzz", "not an address", "0x" + "00" * 33])
def test_decode_signer_rejects(signer):
    with pytest.raises(VerificationError):
        decode_signer(signer)


@pytest.mark.parametrize("name", ["sr25519_signer", "ed25519_signer"])
def test_valid_signature(name, request):
    signer = request.getfixturevalue(name)
    signature = bytes.fromhex(signer.sign_hex(MESSAGE)[2:])

    result = signature_verify(MESSAGE, signature, signer.address)

    assert result.is_valid is True
    assert result.crypto == signer.crypto
    assert result.public_key == signer.public_key


@pytest.mark.parametrize("name", ["sr25519_signer", "ed25519_signer"])
def test_wrapped_message(name, request):
    signer = request.getfixturevalue(name)
    signature = bytes.fromhex(signer.sign_hex(b"<Bytes>" + MESSAGE + b"</Bytes>")[2:])

    assert signature_verify(MESSAGE, signature, "0x" + signer.public_key.hex()).is_valid is True


def test_mismatched_message(ed25519_signer):
    signature = bytes.fromhex(ed25519_signer.sign_hex(MESSAGE)[2:])

    result = signature_verify(b"other message", signature, ed25519_signer.address)

    assert result.is_valid is False
    assert result.crypto == "none"
    assert result.public_key == ed25519_signer.public_key


def test_wrong_signer(sr25519_signer, ed25519_signer):
    signature = bytes.fromhex(sr25519_signer.sign_hex(MESSAGE)[2:])
    assert signature_verify(MESSAGE, signature, ed25519_signer.address).is_valid is False


def test_bad_signature_length(ed25519_signer):
    with pytest.raises(VerificationError, match="signature length"):
        signature_verify(MESSAGE, b"\xde\xad\xbe\xef", ed25519_signer.address)


@pytest.mark.parametrize("name, type_byte", [("ed25519_signer", b"\x00"), ("sr25519_signer", b"\x01")])
def test_multi_signature_type_byte(name, type_byte, request):
    signer = request.getfixturevalue(name)
    signature = type_byte + bytes.fromhex(signer.sign_hex(MESSAGE)[2:])

    result = signature_verify(MESSAGE, signature, signer.address)

    assert result.is_valid is True
    assert result.crypto == signer.crypto


def test_multi_signature_type_byte_restricts_scheme(ed25519_signer):
    # ed25519 signature labelled as sr25519
    signature = b"\x01" + bytes.fromhex(ed25519_signer.sign_hex(MESSAGE)[2:])

    result = signature_verify(MESSAGE, signature, ed25519_signer.address)

    assert result.is_valid is False
    assert result.crypto == "none"


@pytest.mark.parametrize("type_byte, match", [(b"\x02", "ECDSA"), (b"\x07", "type byte")])
def test_multi_signature_rejected_types(type_byte, match, ed25519_signer):
    with pytest.raises(VerificationError, match=match):
        signature_verify(MESSAGE, type_byte + b"\x00" * 64, ed25519_signer.address)
