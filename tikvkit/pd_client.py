"""Mapping keys and ranges onto regions and the stores that serve them."""

from __future__ import annotations

import abc
import dataclasses
import threading
from collections.abc import AsyncIterator, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .bound_range import BoundRange, KeyRange
from .codec import decode_bytes
from .key import Key, to_key

T = TypeVar("T")
C = TypeVar("C")

_END = object()


class RegionNotFoundError(LookupError):
    """Raised when no region exists with the requested id."""

    def __init__(self, region_id: int) -> None:
        super().__init__(f"region {region_id} not found")
        self.region_id = region_id


@dataclass(frozen=True)
class Region:
    """A contiguous span of keys: start inclusive, end exclusive (empty end: no limit)."""

    id: int
    start_key: Key = Key.EMPTY
    end_key: Key = Key.EMPTY
    leader_store_id: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_key", to_key(self.start_key))
        object.__setattr__(self, "end_key", to_key(self.end_key))

    def contains(self, key: object) -> bool:
        """Return whether ``key`` falls inside this region."""
        k = to_key(key)
        return self.start_key <= k and (self.end_key.is_empty() or k < self.end_key)


@dataclass(frozen=True)
class Store:
    """A region together with the client that talks to its leader."""

    region: Region
    client: Any


def decode_region(region: Region, enable_codec: bool) -> Region:
    """Decode the region's boundary keys when the codec is enabled."""
    if not enable_codec:
        return region
    return dataclasses.replace(
        region,
        start_key=Key(decode_bytes(region.start_key.data, False)),
        end_key=Key(decode_bytes(region.end_key.data, False)),
    )


class PdClient(abc.ABC):
    """Resolves keys and ranges to regions and stores.

    With transactional keys, regions handed out here carry keys in raw
    (decoded) form.
    """

    @abc.abstractmethod
    async def map_region_to_store(self, region: Region) -> Store:
        """Return the store that serves ``region``."""

    @abc.abstractmethod
    async def region_for_key(self, key: object) -> Region:
        """Return the region that holds ``key``."""

    @abc.abstractmethod
    async def region_for_id(self, region_id: int) -> Region:
        """Return the region with the given id."""

    async def store_for_key(self, key: object) -> Store:
        """Return the store serving the region that holds ``key``."""
        region = await self.region_for_key(key)
        return await self.map_region_to_store(region)

    async def store_for_id(self, region_id: int) -> Store:
        """Return the store serving the region with the given id."""
        region = await self.region_for_id(region_id)
        return await self.map_region_to_store(region)

    async def group_keys_by_region(
        self, keys: Iterable[T]
    ) -> AsyncIterator[tuple[int, list[T]]]:
        """Group consecutive keys that fall in the same region.

        Only adjacent keys are grouped, so keys should come in region order.
        """
        it = iter(keys)
        pending: Any = next(it, _END)
        while pending is not _END:
            region = await self.region_for_key(to_key(pending))
            grouped = [pending]
            pending = next(it, _END)
            while pending is not _END and region.contains(to_key(pending)):
                grouped.append(pending)
                pending = next(it, _END)
            yield region.id, grouped

    async def stores_for_range(self, bound_range: BoundRange) -> AsyncIterator[Store]:
        """Yield the store for each region the range covers, in key order."""
        start_key, end_key = bound_range.into_keys()
        current: Key | None = start_key
        while current is not None:
            region = await self.region_for_key(current)
            region_end = region.end_key
            store = await self.map_region_to_store(region)
            finished = (
                end_key is not None and end_key <= region_end and not end_key.is_empty()
            ) or region_end.is_empty()
            yield store
            current = None if finished else region_end

    async def group_ranges_by_region(
        self, ranges: Iterable[KeyRange]
    ) -> AsyncIterator[tuple[int, list[KeyRange]]]:
        """Group consecutive ranges by region, splitting ranges at region ends."""
        stack = list(ranges)
        stack.reverse()

        def crosses(end: Key, region_end: Key) -> bool:
            return not region_end.is_empty() and (end > region_end or end.is_empty())

        while stack:
            head = stack.pop()
            start = Key(head.start_key)
            end = Key(head.end_key)
            region = await self.region_for_key(start)
            region_start, region_end = region.start_key, region.end_key

            if crosses(end, region_end):
                stack.append(KeyRange(region_end.data, end.data))
                yield region.id, [KeyRange(start.data, region_end.data)]
                continue

            grouped = [head]
            while stack:
                item = stack.pop()
                start = Key(item.start_key)
                end = Key(item.end_key)
                if start < region_start:
                    stack.append(item)
                    break
                if crosses(end, region_end):
                    grouped.append(KeyRange(start.data, region_end.data))
                    stack.append(KeyRange(region_end.data, end.data))
                    break
                grouped.append(item)
            yield region.id, grouped


class KvClientCache(Generic[C]):
    """Connects to store addresses once and reuses the clients afterwards."""

    def __init__(self, connect: Callable[[str], C]) -> None:
        self._connect = connect
        self._clients: dict[str, C] = {}
        self._lock = threading.Lock()

    def get(self, address: str) -> C:
        """Return the client for ``address``, connecting on first use."""
        with self._lock:
            client = self._clients.get(address)
            if client is None:
                client = self._connect(address)
                self._clients[address] = client
            return client


@dataclass
class MockKvClient:
    """A store client that answers requests through an optional hook."""

    addr: str = ""
    dispatch_hook: Callable[[Any], Any] | None = field(default=None, compare=False)

    async def dispatch(self, request: Any) -> Any:
        """Answer ``request`` with the hook; fails when no hook is set."""
        if self.dispatch_hook is None:
            raise RuntimeError("no dispatch hook set")
        return self.dispatch_hook(request)


class MockPdClient(PdClient):
    """A placement client with two fixed regions split at key [10]."""

    def __init__(self, client: MockKvClient | None = None) -> None:
        self.client = client if client is not None else MockKvClient()

    @classmethod
    def region1(cls) -> Region:
        """Region 1: keys from [0] up to [10], led by store 41."""
        return Region(1, Key(bytes([0])), Key(bytes([10])), leader_store_id=41)

    @classmethod
    def region2(cls) -> Region:
        """Region 2: keys from [10] up to [250, 250], led by store 42."""
        return Region(2, Key(bytes([10])), Key(bytes([250, 250])), leader_store_id=42)

    async def map_region_to_store(self, region: Region) -> Store:
        return Store(region, self.client)

    async def region_for_key(self, key: object) -> Region:
        data = to_key(key).data
        if not data or data[0] < 10:
            return self.region1()
        return self.region2()

    async def region_for_id(self, region_id: int) -> Region:
        if region_id == 1:
            return self.region1()
        if region_id == 2:
            return self.region2()
        raise RegionNotFoundError(region_id)