from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.ec import SECP256R1, SECP384R1, SECP521R1, EllipticCurve
from .exceptions import UnsupportedKeyAlgorithmError


class Curve(Enum):
    """
    Elliptic curves with an SSH ECDSA encoding (RFC 5656 section 10.1).

    Each member carries its SSH identifier, the length of an uncompressed
    point, the hash ECDSA uses with it and the matching ``cryptography``
    curve class.
    """
    NISTP256 = ('nistp256', 65, hashes.SHA256, SECP256R1)
    NISTP384 = ('nistp384', 97, hashes.SHA384, SECP384R1)
    NISTP521 = ('nistp521', 133, hashes.SHA512, SECP521R1)

    def __init__(self, identifier: str, point_length: int, hash_alg: type[hashes.HashAlgorithm], curve_class: type[EllipticCurve]) -> None:
        self.identifier = identifier
        self.point_length = point_length
        self.hash_alg = hash_alg
        self.curve_class = curve_class

    @classmethod
    def from_identifier(cls, identifier: str | bytes) -> Curve:
        if isinstance(identifier, bytes):
            identifier = identifier.decode('ascii', errors='replace')
        for curve in cls:
            if curve.identifier == identifier:
                return curve
        raise UnsupportedKeyAlgorithmError(f'Unsupported curve: {identifier}', algorithm=identifier)

    @classmethod
    def from_crypto_curve(cls, curve: EllipticCurve) -> Curve:
        for member in cls:
            if member.curve_class.name == curve.name:
                return member
        raise UnsupportedKeyAlgorithmError(f'Unsupported curve: {curve.name}', algorithm=curve.name)

    def crypto_curve(self) -> EllipticCurve:
        return self.curve_class()

    def __str__(self) -> str:
        return self.identifier


@dataclass(frozen=True)
class KeyType:
    """
    An SSH public key algorithm name, bound to the curve it implies.
    """
    name: str
    curve: Curve

    @classmethod
    def from_name(cls, name: str | bytes) -> KeyType:
        if isinstance(name, bytes):
            name = name.decode('ascii', errors='replace')
        key_types = get_default_key_types()
        if name not in key_types:
            raise UnsupportedKeyAlgorithmError(f'Unsupported key type: {name}', algorithm=name)
        return key_types[name]

    @classmethod
    def for_curve(cls, curve: Curve) -> KeyType:
        return cls.from_name(f'ecdsa-sha2-{curve.identifier}')

    def __str__(self) -> str:
        return self.name


ECDSA_SHA2_NISTP256 = KeyType('ecdsa-sha2-nistp256', Curve.NISTP256)
ECDSA_SHA2_NISTP384 = KeyType('ecdsa-sha2-nistp384', Curve.NISTP384)
ECDSA_SHA2_NISTP521 = KeyType('ecdsa-sha2-nistp521', Curve.NISTP521)


def get_default_key_types() -> dict[str, KeyType]:
    """
    Returns the SSH key types that are implemented by the library.
    """
    return {
        key_type.name: key_type
        for key_type in (ECDSA_SHA2_NISTP256, ECDSA_SHA2_NISTP384, ECDSA_SHA2_NISTP521)
    }
