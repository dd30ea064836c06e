from __future__ import annotations
from typing import Any


class PivSSHError(Exception):
    """
    Base class for all exceptions
    """
    pass


class MalformedSignatureError(PivSSHError):
    pass


class UnsupportedKeyAlgorithmError(PivSSHError):

    def __init__(self, message: str, algorithm: str | None = None) -> None:
        super().__init__(message)
        self.algorithm = algorithm


class InvalidKeyError(PivSSHError):
    pass


class InvalidSignatureError(PivSSHError):
    pass


class HardwareError(PivSSHError):
    """
    Raised when the device fails a key fetch or a signing request. The
    exception raised by the device is kept as ``__cause__``.
    """

    def __init__(self, message: str, slot: Any = None) -> None:
        super().__init__(message)
        self.slot = slot
