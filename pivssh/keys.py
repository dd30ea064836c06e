from __future__ import annotations
import base64
import hashlib
import logging
import struct
from dataclasses import dataclass, replace
from typing import Optional
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat, load_ssh_public_key
from .algorithms import Curve, KeyType
from .exceptions import InvalidKeyError, UnsupportedKeyAlgorithmError
from .hardware import EcP256, EcP384, PublicKeyInfo, Rsa
from .utils import force_bytes, pack_ssh_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EcdsaPublicKey:
    curve: Curve
    key: bytes


# Only ECDSA keys are modelled; other kinds get their own class here.
PublicKeyKind = EcdsaPublicKey


@dataclass(frozen=True)
class PublicKey:
    """
    An SSH public key: the algorithm name, the key material and an optional
    comment.
    """
    key_type: KeyType
    kind: PublicKeyKind
    comment: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, EcdsaPublicKey):
            raise InvalidKeyError('Key must be an EcdsaPublicKey instance')
        if self.key_type.curve is not self.kind.curve:
            raise InvalidKeyError(
                f'Key type {self.key_type.name} does not match curve {self.kind.curve.identifier}'
            )

    @property
    def curve(self) -> Curve:
        return self.kind.curve

    def to_bytes(self) -> bytes:
        """
        Returns the key in SSH wire format (RFC 5656 section 3.1).
        """
        return (
            pack_ssh_string(self.key_type.name)
            + pack_ssh_string(self.kind.curve.identifier)
            + pack_ssh_string(self.kind.key)
        )

    def to_openssh(self) -> str:
        line = f'{self.key_type.name} {base64.b64encode(self.to_bytes()).decode("ascii")}'
        if self.comment:
            line += f' {self.comment}'
        return line

    def fingerprint(self) -> str:
        digest = hashlib.sha256(self.to_bytes()).digest()
        return 'SHA256:' + base64.b64encode(digest).decode('ascii').rstrip('=')

    def with_comment(self, comment: Optional[str]) -> PublicKey:
        return replace(self, comment=comment)

    def to_cryptography(self) -> EllipticCurvePublicKey:
        try:
            return EllipticCurvePublicKey.from_encoded_point(self.kind.curve.crypto_curve(), self.kind.key)
        except ValueError as e:
            raise InvalidKeyError(f'Invalid {self.kind.curve.identifier} point: {e}') from e

    @classmethod
    def from_bytes(cls, blob: bytes, comment: Optional[str] = None) -> PublicKey:
        blob = bytes(blob)
        if len(blob) < 4:
            raise InvalidKeyError('Invalid SSH public key')
        name_length = struct.unpack('>I', blob[:4])[0]
        return cls._load(blob[4:4 + name_length], base64.b64encode(blob), comment)

    @classmethod
    def from_openssh(cls, line: str | bytes) -> PublicKey:
        parts = force_bytes(line).strip().split(None, 2)
        if len(parts) < 2:
            raise InvalidKeyError('Invalid SSH key format')

        comment = None
        if len(parts) == 3:
            try:
                comment = parts[2].decode('utf-8')
            except UnicodeDecodeError as e:
                raise InvalidKeyError(f'Invalid SSH key comment: {e}') from e

        return cls._load(parts[0], parts[1], comment)

    @classmethod
    def _load(cls, key_type_name: bytes, encoded: bytes, comment: Optional[str]) -> PublicKey:
        name = key_type_name.decode('ascii', errors='replace')
        try:
            key_obj = load_ssh_public_key(key_type_name + b' ' + encoded)
        except UnsupportedAlgorithm as e:
            raise UnsupportedKeyAlgorithmError(f'Unsupported key type: {name}', algorithm=name) from e
        except ValueError as e:
            raise InvalidKeyError(f'Invalid SSH key format: {e}') from e

        if not isinstance(key_obj, EllipticCurvePublicKey):
            raise UnsupportedKeyAlgorithmError(f'Unsupported key type: {name}', algorithm=name)

        curve = Curve.from_crypto_curve(key_obj.curve)
        point = key_obj.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)
        return cls(KeyType.for_curve(curve), EcdsaPublicKey(curve, point), comment)

    def __str__(self) -> str:
        return self.to_openssh()


def public_key_from_info(info: PublicKeyInfo) -> PublicKey:
    """
    Wraps a public key reported by the device in a :class:`PublicKey`.

    Only the elliptic curve variants are supported. Everything else raises
    :class:`UnsupportedKeyAlgorithmError` carrying the variant name.
    """
    if isinstance(info, EcP256):
        curve = Curve.NISTP256
    elif isinstance(info, EcP384):
        curve = Curve.NISTP384
    elif isinstance(info, Rsa):
        logger.warning('Refusing RSA public key')
        raise UnsupportedKeyAlgorithmError('RSA keys are not supported', algorithm=info.name)
    else:
        name = type(info).__name__
        logger.warning('Refusing unknown public key variant %s', name)
        raise UnsupportedKeyAlgorithmError(f'Unsupported public key: {name}', algorithm=name)

    return PublicKey(
        key_type=KeyType.for_curve(curve),
        kind=EcdsaPublicKey(curve=curve, key=bytes(info.point)),
        comment=None,
    )
