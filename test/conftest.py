"""Shared fixtures: deterministic sr25519 and ed25519 signers."""
import pytest
from nacl.signing import SigningKey
from substrateinterface import Keypair, KeypairType

from sigverify.config import Config


class Signer:
    def __init__(self, crypto, public_key, address, sign):
        self.crypto = crypto
        self.public_key = public_key
        self.address = address
        self._sign = sign

    def sign_hex(self, message: bytes) -> str:
        return "0x" + self._sign(message).hex()


@pytest.fixture(scope="session")
def sr25519_signer():
    pair = Keypair.create_from_seed("0x" + "11" * 32, ss58_format=42, crypto_type=KeypairType.SR25519)
    return Signer("sr25519", pair.public_key, pair.ss58_address, pair.sign)


@pytest.fixture(scope="session")
def ed25519_signer():
    key = SigningKey(b"\x22" * 32)
    public_key = bytes(key.verify_key)
    address = Keypair(public_key=public_key, ss58_format=42, crypto_type=KeypairType.ED25519).ss58_address
    return Signer("ed25519", public_key, address, lambda m: key.sign(m).signature)


@pytest.fixture
def config(tmp_path):
    return Config(batch_file=tmp_path / "examples" / "batch.json", log_level="WARNING")
