"""Ranges over keys, as used for scans."""

from __future__ import annotations

from dataclasses import dataclass

from .key import Bound, BoundKind, Key, _to_bytes, to_key


@dataclass(frozen=True)
class KeyRange:
    """A range on the wire: inclusive start key, exclusive end key (empty means unbounded)."""

    start_key: bytes = b""
    end_key: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_key", _to_bytes(self.start_key))
        object.__setattr__(self, "end_key", _to_bytes(self.end_key))


@dataclass(frozen=True, eq=False)
class BoundRange:
    """A range of keys with a lower and an upper bound.

    The empty key is the smallest key, so an absent lower bound means the empty
    key. An empty key used as the upper bound means no upper bound.
    """

    start: Bound
    end: Bound

    @classmethod
    def range_from(cls, start: object) -> BoundRange:
        """Keys from ``start`` (inclusive) upwards."""
        return cls(Bound.included(start), Bound.unbounded())

    @classmethod
    def half_open(cls, start: object, end: object) -> BoundRange:
        """Keys from ``start`` (inclusive) up to ``end`` (exclusive)."""
        return cls(Bound.included(start), Bound.excluded(end))

    @classmethod
    def inclusive(cls, start: object, end: object) -> BoundRange:
        """Keys from ``start`` to ``end``, both inclusive."""
        return cls(Bound.included(start), Bound.included(end))

    @classmethod
    def up_to(cls, end: object) -> BoundRange:
        """All keys below ``end``."""
        return cls(Bound.unbounded(), Bound.excluded(end))

    @classmethod
    def up_to_inclusive(cls, end: object) -> BoundRange:
        """All keys up to and including ``end``."""
        return cls(Bound.unbounded(), Bound.included(end))

    @classmethod
    def full(cls) -> BoundRange:
        """Every key."""
        return cls(Bound.unbounded(), Bound.unbounded())

    @classmethod
    def from_keys(cls, start: object, end: object | None) -> BoundRange:
        """Build a range from scan keys.

        The start is inclusive unless it ends in a zero byte; the end is
        exclusive unless it ends in a zero byte. ``None`` as the end means no
        upper bound.
        """
        upper = Bound.unbounded() if end is None else to_key(end).into_upper_bound()
        return cls(to_key(start).into_lower_bound(), upper)

    @classmethod
    def from_bounds(cls, start: Bound, end: Bound) -> BoundRange:
        """Build a range from two explicit bounds."""
        if not isinstance(start, Bound) or not isinstance(end, Bound):
            raise TypeError("from_bounds expects two Bound values")
        return cls(start, end)

    @classmethod
    def from_key_range(cls, key_range: KeyRange) -> BoundRange:
        """Build a range from its wire form."""
        start = Key(key_range.start_key)
        end = Key(key_range.end_key)
        return cls(start.into_lower_bound(), end.into_upper_bound())

    def into_keys(self) -> tuple[Key, Key | None]:
        """Return the scan keys: inclusive start and exclusive end (None for no end)."""
        if self.start.kind is BoundKind.INCLUDED:
            start = self.start.key
        elif self.start.kind is BoundKind.EXCLUDED:
            start = self.start.key.with_zero()
        else:
            start = Key.EMPTY

        if self.end.kind is BoundKind.INCLUDED:
            end: Key | None = self.end.key.with_zero()
        elif self.end.kind is BoundKind.EXCLUDED:
            end = self.end.key
        else:
            end = None
        return start, end

    def start_bound(self) -> Bound:
        """The lower bound as given."""
        return self.start

    def end_bound(self) -> Bound:
        """The upper bound, with an empty key read as no bound."""
        if self.end.kind is not BoundKind.UNBOUNDED and self.end.key.is_empty():
            return Bound.unbounded()
        return self.end

    def to_key_range(self) -> KeyRange:
        """Return the wire form, with an empty end key when there is no upper bound."""
        start, end = self.into_keys()
        return KeyRange(start.data, end.data if end is not None else b"")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoundRange):
            return (self.start, self.end) == (other.start, other.end)
        if isinstance(other, tuple) and len(other) == 2 and all(isinstance(b, Bound) for b in other):
            return (self.start, self.end) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.start, self.end))