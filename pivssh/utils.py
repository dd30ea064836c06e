from __future__ import annotations
import struct
from typing import NamedTuple, Union
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature
from .exceptions import MalformedSignatureError


class SignatureComponents(NamedTuple):
    r: bytes
    s: bytes


def force_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    elif isinstance(value, bytes):
        return value
    else:
        raise TypeError('Expected string or bytes type')


def _to_der_integer_bytes(val: int) -> bytes:
    # Minimal big-endian bytes with one 0x00 when the high bit is set
    return val.to_bytes(val.bit_length() // 8 + 1, byteorder='big')


def der_to_r_s(der_sig: bytes) -> SignatureComponents:
    """
    Splits a DER encoded ECDSA-Sig-Value into its ``r`` and ``s`` integers.

    The integers are returned as DER encodes them, so a value with its high
    bit set keeps its single leading zero byte. Any structural problem
    raises :class:`MalformedSignatureError`.
    """
    if not isinstance(der_sig, (bytes, bytearray, memoryview)):
        raise TypeError('Expected bytes type')

    try:
        r, s = decode_dss_signature(bytes(der_sig))
    except ValueError as e:
        raise MalformedSignatureError(f'Invalid DER signature: {e}') from e

    if r <= 0 or s <= 0:
        raise MalformedSignatureError('Signature integers must be positive')

    return SignatureComponents(_to_der_integer_bytes(r), _to_der_integer_bytes(s))


def pack_ssh_uint32(value: int) -> bytes:
    return struct.pack('>I', value)


def pack_ssh_string(value: Union[str, bytes]) -> bytes:
    value = force_bytes(value)
    return pack_ssh_uint32(len(value)) + value


def pack_ssh_mpint(value: Union[int, bytes]) -> bytes:
    """
    Packs an unsigned integer, given as an int or as big-endian bytes, as an
    SSH mpint (RFC 4251 section 5).
    """
    if isinstance(value, int):
        if value < 0:
            raise ValueError('Must be a positive integer')
        value = value.to_bytes((value.bit_length() + 7) // 8, byteorder='big')

    value = bytes(value).lstrip(b'\x00')
    if value and value[0] & 0x80:
        value = b'\x00' + value
    return pack_ssh_string(value)


def encode_ssh_signature(sig_type: Union[str, bytes], r: bytes, s: bytes) -> bytes:
    """
    Builds the SSH ECDSA signature blob of RFC 5656 section 3.1.2:
    ``string(sig_type) || string(mpint(r) || mpint(s))``.
    """
    sig_inner = pack_ssh_mpint(r) + pack_ssh_mpint(s)
    return pack_ssh_string(sig_type) + pack_ssh_string(sig_inner)
