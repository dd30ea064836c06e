import threading
import time
from typing import Dict, NamedTuple, Optional
from .keys import PublicKey


class PublicKeyWithTimestamp(NamedTuple):
    public_key: PublicKey
    timestamp: int


class PublicKeyCache:

    def __init__(self, lifespan: int) -> None:
        self.entries: Dict[int, PublicKeyWithTimestamp] = {}
        self.lifespan = lifespan
        self._lock = threading.Lock()

    def get(self, slot: int) -> Optional[PublicKey]:
        with self._lock:
            entry = self.entries.get(slot)
            if entry is None:
                return None
            if self._expired(entry):
                del self.entries[slot]
                return None
            return entry.public_key

    def put(self, slot: int, public_key: PublicKey) -> None:
        with self._lock:
            self.entries[slot] = PublicKeyWithTimestamp(public_key, int(time.time()))

    def is_expired(self, slot: int) -> bool:
        with self._lock:
            entry = self.entries.get(slot)
            return entry is None or self._expired(entry)

    def _expired(self, entry: PublicKeyWithTimestamp) -> bool:
        return int(time.time()) - entry.timestamp > self.lifespan

    def delete(self, slot: int) -> None:
        with self._lock:
            self.entries.pop(slot, None)

    def clear(self) -> None:
        with self._lock:
            self.entries.clear()
