from __future__ import annotations
import logging
from typing import Any, Union
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ec import ECDSA
from .exceptions import HardwareError, InvalidSignatureError, MalformedSignatureError, PivSSHError
from .hardware import AlgorithmId, Device, SlotId
from .key_cache import PublicKeyCache
from .keys import PublicKey, public_key_from_info
from .utils import der_to_r_s, encode_ssh_signature, force_bytes

logger = logging.getLogger(__name__)


def _slot_label(slot: SlotId) -> str:
    return f'{int(slot):#04x}'


class PivSSH:
    """
    Produces SSH certificate material from a PIV device: public keys in SSH
    form and SSH ECDSA signature blobs.
    """

    def __init__(self, device: Device, options: dict[str, Any] | None = None) -> None:
        self.device = device
        if options is None:
            options = {}
        self.options: dict[str, Any] = {**self._get_default_options(), **options}

        self.key_cache: PublicKeyCache | None = None
        if self.options['cache_public_keys']:
            lifespan = self.options['cache_lifespan']
            if not isinstance(lifespan, int) or isinstance(lifespan, bool) or lifespan <= 0:
                raise PivSSHError(f'Lifespan must be greater than 0, the input is "{lifespan}"')
            self.key_cache = PublicKeyCache(lifespan)

    def _get_default_options(self) -> dict[str, Any]:
        """Returns the default options for this instance."""
        return {
            'verify_signature': True,
            'cache_public_keys': False,
            'cache_lifespan': 300,
        }

    def fetch_pubkey(self, slot: SlotId, refresh: bool = False) -> PublicKey:
        """
        Returns the public key held in ``slot`` as an SSH public key.

        Args:
            slot: The PIV slot to read.
            refresh: Skip the key cache and ask the device.
        """
        if self.key_cache is not None and not refresh:
            public_key = self.key_cache.get(slot)
            if public_key is not None:
                logger.debug('Using cached public key for slot %s', _slot_label(slot))
                return public_key

        try:
            info = self.device.fetch_pubkey(slot)
        except Exception as e:
            logger.error('Fetching public key from slot %s failed: %s', _slot_label(slot), e)
            raise HardwareError(f'Failed to fetch public key from slot {_slot_label(slot)}', slot=slot) from e

        public_key = public_key_from_info(info)
        if self.key_cache is not None:
            self.key_cache.put(slot, public_key)
        return public_key

    def sign(self, data: Union[str, bytes], slot: SlotId, options: dict[str, Any] | None = None) -> bytes:
        """
        Signs ``data`` with the key in ``slot`` and returns the signature in
        the SSH certificate signature format.

        The signing algorithm follows the curve of the key actually held in
        the slot.

        Args:
            data: The certificate body to sign.
            slot: The PIV slot holding the CA key.
            options: Per-call overrides of the instance options.
        """
        merged_options = {**self.options, **(options or {})}
        data = force_bytes(data)

        public_key = self.fetch_pubkey(slot)
        algorithm = AlgorithmId.for_curve(public_key.curve)
        sig_type = public_key.key_type.name
        logger.debug('Signing %d bytes with slot %s using %s', len(data), _slot_label(slot), sig_type)

        try:
            der_sig = self.device.sign_data(data, algorithm, slot)
        except Exception as e:
            logger.error('Signing with slot %s failed: %s', _slot_label(slot), e)
            # The cached key may name an algorithm the slot no longer holds
            if self.key_cache is not None:
                self.key_cache.delete(slot)
            raise HardwareError(f'Failed to sign with slot {_slot_label(slot)}', slot=slot) from e

        if not isinstance(der_sig, (bytes, bytearray, memoryview)):
            logger.warning('Slot %s returned %s instead of a signature', _slot_label(slot), type(der_sig).__name__)
            raise MalformedSignatureError(f'Expected DER bytes from slot {_slot_label(slot)}, got {type(der_sig).__name__}')
        der_sig = bytes(der_sig)

        try:
            r, s = der_to_r_s(der_sig)
        except MalformedSignatureError as e:
            logger.warning('Slot %s returned a malformed signature: %s', _slot_label(slot), e)
            raise

        if merged_options['verify_signature']:
            self._verify(data, public_key, der_sig, slot)

        return encode_ssh_signature(sig_type, r, s)

    def _verify(self, data: bytes, public_key: PublicKey, der_sig: bytes, slot: SlotId) -> None:
        verifier = public_key.to_cryptography()
        try:
            verifier.verify(der_sig, data, ECDSA(public_key.curve.hash_alg()))
        except InvalidSignature:
            logger.warning('Signature from slot %s does not verify against its public key', _slot_label(slot))
            # The slot may hold a different key than the one cached
            if self.key_cache is not None:
                self.key_cache.delete(slot)
            raise InvalidSignatureError('Signature verification failed')


def ssh_cert_fetch_pubkey(device: Device, slot: SlotId) -> PublicKey:
    return PivSSH(device).fetch_pubkey(slot)


def ssh_cert_signer(device: Device, data: Union[str, bytes], slot: SlotId, options: dict[str, Any] | None = None) -> bytes:
    return PivSSH(device, options).sign(data, slot)
