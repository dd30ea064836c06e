from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Protocol, Union
from .algorithms import Curve
from .exceptions import UnsupportedKeyAlgorithmError


class SlotId(IntEnum):
    """
    PIV key slots (NIST SP 800-73-4, table 4b).
    """
    AUTHENTICATION = 0x9a
    SIGNATURE = 0x9c
    KEY_MANAGEMENT = 0x9d
    CARD_AUTHENTICATION = 0x9e


class AlgorithmId(IntEnum):
    RSA1024 = 0x06
    RSA2048 = 0x07
    ECCP256 = 0x11
    ECCP384 = 0x14

    @classmethod
    def for_curve(cls, curve: Curve) -> AlgorithmId:
        if curve is Curve.NISTP256:
            return cls.ECCP256
        if curve is Curve.NISTP384:
            return cls.ECCP384
        raise UnsupportedKeyAlgorithmError(f'No PIV signing algorithm for curve {curve.identifier}', algorithm=curve.identifier)


@dataclass(frozen=True)
class EcP256:
    point: bytes
    name: ClassVar[str] = 'EcP256'


@dataclass(frozen=True)
class EcP384:
    point: bytes
    name: ClassVar[str] = 'EcP384'


@dataclass(frozen=True)
class Rsa:
    modulus: int
    exponent: int
    name: ClassVar[str] = 'Rsa'


PublicKeyInfo = Union[EcP256, EcP384, Rsa]


class Device(Protocol):
    """
    The hardware access layer. Implementations talk to the card; any
    exception they raise is treated as a hardware failure.
    """

    def fetch_pubkey(self, slot: SlotId) -> PublicKeyInfo:
        ...

    def sign_data(self, data: bytes, algorithm: AlgorithmId, slot: SlotId) -> bytes:
        """
        Returns the DER encoded signature over ``data``.
        """
        ...
