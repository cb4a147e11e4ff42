"""A small pool of dedicated Redis connections with health checks on reuse."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError


async def _close(conn: Any) -> None:
    closer = getattr(conn, "aclose", None) or conn.close
    with suppress(RedisError, OSError):
        await closer()


class RedisPool:
    """Hands out at most ``max_size`` Redis connections at a time.

    An idle connection is pinged before it is handed out again; one that
    fails the ping is closed and replaced by a new connection.
    """

    def __init__(self, url: str, max_size: int = 16) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.url = url
        self.max_size = max_size
        self._idle: deque[Any] = deque()
        self._slots = asyncio.Semaphore(max_size)
        self._closed = False

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[Any]:
        """Borrow a connection for the duration of the ``async with`` block."""
        if self._closed:
            raise RuntimeError("pool is closed")
        async with self._slots:
            if self._closed:
                raise RuntimeError("pool is closed")
            conn = await self._checkout()
            try:
                yield conn
            finally:
                if self._closed:
                    await _close(conn)
                else:
                    self._idle.append(conn)

    async def _checkout(self) -> Any:
        while self._idle:
            conn = self._idle.pop()
            try:
                await self.recycle(conn)
            except (RedisError, OSError):
                await _close(conn)
                continue
            return conn
        return Redis.from_url(self.url, single_connection_client=True)

    async def recycle(self, conn: Any) -> None:
        """Check that a connection still answers; raise if it does not."""
        await conn.ping()

    async def close(self) -> None:
        """Close every idle connection and refuse further borrowing."""
        self._closed = True
        while self._idle:
            await _close(self._idle.pop())

    async def __aenter__(self) -> RedisPool:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()