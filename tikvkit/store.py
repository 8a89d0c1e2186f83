"""An in-memory raw key/value store."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from .key import KvPair, _to_bytes, to_key


class KvStore:
    """A thread-safe map from keys to values that answers raw requests."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _key_bytes(key: object) -> bytes:
        return to_key(key).data

    def raw_get(self, key: object) -> bytes | None:
        """Return the value stored under ``key``, or None when there is none."""
        with self._lock:
            return self._data.get(self._key_bytes(key))

    def raw_batch_get(self, keys: Iterable[object]) -> list[KvPair]:
        """Return pairs for the requested keys that exist, in the order asked."""
        with self._lock:
            pairs = []
            for key in keys:
                data = self._key_bytes(key)
                if data in self._data:
                    pairs.append(KvPair(data, self._data[data]))
            return pairs

    def raw_put(self, key: object, value: object) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        with self._lock:
            self._data[self._key_bytes(key)] = _to_bytes(value)

    def raw_batch_put(self, pairs: Iterable[KvPair | tuple[object, object]]) -> None:
        """Store every pair; later pairs win over earlier ones with the same key."""
        items = [
            pair if isinstance(pair, KvPair) else KvPair.from_tuple(pair) for pair in pairs
        ]
        with self._lock:
            self._data.update((pair.key.data, pair.value) for pair in items)

    def raw_delete(self, key: object) -> None:
        """Remove ``key``; a missing key is not an error."""
        with self._lock:
            self._data.pop(self._key_bytes(key), None)

    def raw_batch_delete(self, keys: Iterable[object]) -> None:
        """Remove every key given; missing keys are ignored."""
        with self._lock:
            for key in keys:
                self._data.pop(self._key_bytes(key), None)