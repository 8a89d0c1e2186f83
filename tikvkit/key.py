"""Keys, values, key/value pairs and range bounds over keys."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Union

from .codec import encode_bytes

Value = bytes
"""A value is any sequence of bytes."""

KeyLike = Union["Key", bytes, bytearray, memoryview, str, "list[int]", "tuple[int, ...]"]


def hex_repr(data: bytes) -> str:
    """Render bytes as upper-case hexadecimal, two digits per byte."""
    return bytes(data).hex().upper()


def _to_bytes(value: object) -> bytes:
    if isinstance(value, Key):
        return value.data
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (list, tuple)):
        return bytes(value)
    raise TypeError(f"cannot convert {type(value).__name__} to bytes")


def to_key(value: object) -> Key:
    """Convert bytes, text, a list of byte values, a Key or a KvPair into a Key."""
    if isinstance(value, Key):
        return value
    if isinstance(value, KvPair):
        return value.key
    return Key(_to_bytes(value))


@dataclass(frozen=True, order=True, repr=False)
class Key:
    """The key part of a key/value pair: an ordered sequence of bytes."""

    data: bytes = b""

    EMPTY: ClassVar[Key]

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _to_bytes(self.data))

    def is_empty(self) -> bool:
        """Return whether the key has no bytes."""
        return not self.data

    def zero_terminated(self) -> bool:
        """Return whether the last byte of the key is zero."""
        return self.data.endswith(b"\x00")

    def with_zero(self) -> Key:
        """Return the smallest key greater than this one: this key followed by a zero byte."""
        return Key(self.data + b"\x00")

    def into_lower_bound(self) -> Bound:
        """Treat the key as an inclusive lower bound.

        A zero-terminated key becomes an exclusive bound on the key without its
        trailing zero.
        """
        if self.zero_terminated():
            return Bound.excluded(Key(self.data[:-1]))
        return Bound.included(self)

    def into_upper_bound(self) -> Bound:
        """Treat the key as an exclusive upper bound.

        A zero-terminated key becomes an inclusive bound on the key without its
        trailing zero.
        """
        if self.zero_terminated():
            return Bound.included(Key(self.data[:-1]))
        return Bound.excluded(self)

    def to_encoded(self) -> Key:
        """Return the MVCC-encoded form of the key."""
        return Key(encode_bytes(self.data, False))

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __repr__(self) -> str:
        return f"Key({hex_repr(self.data)})"


Key.EMPTY = Key(b"")


class BoundKind(enum.Enum):
    """Whether a bound includes its key, excludes it, or is absent."""

    INCLUDED = "included"
    EXCLUDED = "excluded"
    UNBOUNDED = "unbounded"


@dataclass(frozen=True)
class Bound:
    """One end of a range of keys."""

    kind: BoundKind
    key: Key | None = None

    def __post_init__(self) -> None:
        if self.kind is BoundKind.UNBOUNDED:
            if self.key is not None:
                raise ValueError("an unbounded bound carries no key")
            return
        if self.key is None:
            raise ValueError(f"a {self.kind.value} bound needs a key")
        object.__setattr__(self, "key", to_key(self.key))

    @classmethod
    def included(cls, key: object) -> Bound:
        """A bound that includes ``key``."""
        return cls(BoundKind.INCLUDED, to_key(key))

    @classmethod
    def excluded(cls, key: object) -> Bound:
        """A bound that excludes ``key``."""
        return cls(BoundKind.EXCLUDED, to_key(key))

    @classmethod
    def unbounded(cls) -> Bound:
        """No bound at all."""
        return cls(BoundKind.UNBOUNDED)


_DEBUG_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _debug_str(text: str) -> str:
    parts = []
    for ch in text:
        if ch in _DEBUG_ESCAPES:
            parts.append(_DEBUG_ESCAPES[ch])
        elif not ch.isprintable():
            parts.append(f"\\u{{{ord(ch):x}}}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


@dataclass(frozen=True, repr=False)
class KvPair:
    """A key together with its value."""

    key: Key
    value: Value = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", to_key(self.key))
        object.__setattr__(self, "value", _to_bytes(self.value))

    @classmethod
    def from_tuple(cls, pair: tuple[object, object]) -> KvPair:
        """Build a pair from a ``(key, value)`` tuple."""
        key, value = pair
        return cls(to_key(key), _to_bytes(value))

    def __iter__(self) -> Iterator[object]:
        yield self.key
        yield self.value

    def __repr__(self) -> str:
        key_hex = hex_repr(self.key.data)
        try:
            text = self.value.decode("utf-8")
        except UnicodeDecodeError:
            return f"KvPair({key_hex}, {hex_repr(self.value)})"
        return f"KvPair({key_hex}, {_debug_str(text)})"