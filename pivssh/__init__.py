from .algorithms import Curve, KeyType, get_default_key_types
from .api_cert import PivSSH, ssh_cert_fetch_pubkey, ssh_cert_signer
from .exceptions import (
    HardwareError,
    InvalidKeyError,
    InvalidSignatureError,
    MalformedSignatureError,
    PivSSHError,
    UnsupportedKeyAlgorithmError,
)
from .hardware import AlgorithmId, Device, EcP256, EcP384, PublicKeyInfo, Rsa, SlotId
from .keys import EcdsaPublicKey, PublicKey, PublicKeyKind, public_key_from_info
from .utils import SignatureComponents, der_to_r_s, encode_ssh_signature

__version__ = "0.1.0"

__all__ = [
    "PivSSH",
    "ssh_cert_fetch_pubkey",
    "ssh_cert_signer",
    "der_to_r_s",
    "encode_ssh_signature",
    "public_key_from_info",
    "SignatureComponents",
    "Curve",
    "KeyType",
    "get_default_key_types",
    "PublicKey",
    "PublicKeyKind",
    "EcdsaPublicKey",
    "AlgorithmId",
    "Device",
    "EcP256",
    "EcP384",
    "PublicKeyInfo",
    "Rsa",
    "SlotId",
    # Exceptions
    "PivSSHError",
    "HardwareError",
    "InvalidKeyError",
    "InvalidSignatureError",
    "MalformedSignatureError",
    "UnsupportedKeyAlgorithmError",
]
