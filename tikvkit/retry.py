"""Retrying requests to a cluster, reconnecting between failed attempts."""

from __future__ import annotations

import abc
import asyncio
import time
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any, Generic, TypeVar

RECONNECT_INTERVAL_SEC = 1
MAX_REQUEST_COUNT = 5
LEADER_CHANGE_RETRY = 10

T = TypeVar("T")
C = TypeVar("C")


class Reconnectable(abc.ABC):
    """Something holding a cluster connection that can be re-established."""

    cluster: Any

    @abc.abstractmethod
    async def reconnect(self, interval_sec: int) -> None:
        """Re-establish the connection; raise if that fails."""


async def retry(client: Reconnectable, call: Callable[[Any], Awaitable[T]]) -> T:
    """Run ``call(client.cluster)`` until it succeeds, at most LEADER_CHANGE_RETRY times.

    After each failure the client reconnects; if reconnecting fails
    MAX_REQUEST_COUNT times in a row, that reconnect error is raised. When all
    attempts fail the last error from ``call`` is raised.
    """
    last_err: Exception | None = None
    for _ in range(LEADER_CHANGE_RETRY):
        try:
            return await call(client.cluster)
        except Exception as err:  # noqa: BLE001 - any request failure triggers a retry
            last_err = err

        reconnect_count = MAX_REQUEST_COUNT
        while True:
            try:
                await client.reconnect(RECONNECT_INTERVAL_SEC)
                break
            except Exception:
                reconnect_count -= 1
                if reconnect_count == 0:
                    raise
                await asyncio.sleep(RECONNECT_INTERVAL_SEC)

    assert last_err is not None
    raise last_err


class ReconnectingCluster(Reconnectable, Generic[C]):
    """A cluster handle that reconnects at most once per interval.

    ``reconnector(cluster, timeout)`` returns the re-established cluster.
    """

    def __init__(
        self,
        cluster: C,
        reconnector: Callable[[C, timedelta], Awaitable[C]],
        timeout: timedelta,
        last_connected: float | None = None,
    ) -> None:
        self.cluster = cluster
        self.timeout = timeout
        self.last_connected = time.monotonic() if last_connected is None else last_connected
        self._reconnector = reconnector
        self._lock = asyncio.Lock()

    async def reconnect(self, interval_sec: int) -> None:
        """Reconnect unless another reconnect finished within the last ``interval_sec``."""
        reconnect_begin = time.monotonic()
        async with self._lock:
            if reconnect_begin > self.last_connected + interval_sec:
                self.cluster = await self._reconnector(self.cluster, self.timeout)
                self.last_connected = time.monotonic()

    def __repr__(self) -> str:
        return f"ReconnectingCluster(timeout={self.timeout!r})"