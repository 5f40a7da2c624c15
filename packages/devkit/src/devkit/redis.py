from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class AsyncRedisManager:
    """Lazily connected redis client that re-pings and rebuilds itself after a failure.

    ``max_retries`` bounds how many times one command is attempted; ``1`` means a
    failed command is raised straight away without a reconnect-and-retry round.
    """

    def __init__(
        self,
        url: str,
        *,
        max_retries: int = 1,
        base_delay_seconds: float = 0.2,
        client_factory: Callable[[str], Any] | None = None,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self._url = url
        self._max_retries = max_retries
        self._base_delay_seconds = base_delay_seconds
        self._client_factory = client_factory
        self._client: Any | None = None
        self._lock = asyncio.Lock()

    async def get_client(self) -> Any:
        async with self._lock:
            if self._client is None:
                self._client = self._new_client()
                await self._client.ping()
            return self._client

    async def reset(self) -> None:
        async with self._lock:
            await self._close_current()

    async def close(self) -> None:
        async with self._lock:
            await self._close_current()

    async def execute(self, operation: str, *args, **kwargs):
        attempt = 0
        while True:
            client = await self.get_client()
            method = getattr(client, operation)
            try:
                return await method(*args, **kwargs)
            except Exception:
                attempt += 1
                if attempt >= self._max_retries:
                    raise
                logger.warning("redis_command_retry", extra={"operation": operation, "attempt": attempt})
                await self.reset()
                await asyncio.sleep(self._base_delay_seconds * (2 ** (attempt - 1)))

    async def _close_current(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        try:
            await client.close()
        except Exception:
            logger.warning("redis_close_failed", exc_info=True)

    def _new_client(self) -> Any:
        if self._client_factory is not None:
            return self._client_factory(self._url)
        import redis.asyncio as redis

        return redis.from_url(
            self._url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            health_check_interval=30,
        )


def create_redis_client(url: str | None, *, max_retries: int = 1) -> AsyncRedisManager | None:
    if not url:
        return None
    return AsyncRedisManager(url, max_retries=max_retries)
