import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from pivssh.hardware import AlgorithmId, EcP256, EcP384, SlotId


class FakeDevice:
    """A PIV device backed by in-memory ``cryptography`` keys."""

    def __init__(self):
        self.keys = {}
        self.infos = {}
        self.fetch_calls = []
        self.sign_calls = []
        self.fetch_error = None
        self.sign_error = None
        self.signature_override = None

    def generate(self, slot, curve):
        key = ec.generate_private_key(curve)
        self.keys[slot] = key
        return key

    def fetch_pubkey(self, slot):
        self.fetch_calls.append(slot)
        if self.fetch_error is not None:
            raise self.fetch_error
        if slot in self.infos:
            return self.infos[slot]

        key = self.keys[slot]
        point = key.public_key().public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)
        if isinstance(key.curve, ec.SECP256R1):
            return EcP256(point)
        return EcP384(point)

    def sign_data(self, data, algorithm, slot):
        self.sign_calls.append((data, algorithm, slot))
        if self.sign_error is not None:
            raise self.sign_error
        if self.signature_override is not None:
            return self.signature_override

        key = self.keys[slot]
        expected = AlgorithmId.ECCP256 if isinstance(key.curve, ec.SECP256R1) else AlgorithmId.ECCP384
        if algorithm is not expected:
            raise ValueError(f'algorithm mismatch: slot holds {expected.name}, asked for {algorithm.name}')
        hash_alg = hashes.SHA256() if isinstance(key.curve, ec.SECP256R1) else hashes.SHA384()
        return key.sign(data, ec.ECDSA(hash_alg))


@pytest.fixture
def device():
    fake = FakeDevice()
    fake.generate(SlotId.AUTHENTICATION, ec.SECP256R1())
    fake.generate(SlotId.SIGNATURE, ec.SECP384R1())
    return fake


@pytest.fixture
def p256_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def p384_key():
    return ec.generate_private_key(ec.SECP384R1())
