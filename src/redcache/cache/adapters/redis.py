# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Redis-backed response cache adapter."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from redis.exceptions import RedisError

from redcache.cache.connection import ConnectionEvent, ConnectionMonitor, ConnectionState
from redcache.cache.options import CacheKeyFn, CacheOptions, ExpirationFn, SkipCacheFn, normalize_path
from redcache.kernel.exceptions import CacheSkippedException, StoreException
from redcache.logging.port import LineWriter
from redcache.logging.structlog_adapter import StructlogLineWriter

_logger = logging.getLogger(__name__)


class RedisResponseCache:
    """Caches response bodies in Redis, keyed by normalized request path.

    Delegates to a ``redis.asyncio.Redis``-like client that the adapter owns.
    While the client is disconnected, :meth:`fetch` and :meth:`put` do
    nothing; there is no queueing and no retry.

    Args:
        client: The Redis client.
        expiration: TTL in seconds, a ``timedelta``, or ``(path, request) -> seconds``.
        cache_key: ``(path, request) -> key``. Defaults to the normalized path.
        skip_cache: ``(path, request) -> bool``. Defaults to never skipping.
        ui: Sink for connection diagnostics, one line per event.
        health_check_interval: Seconds between connection pings.
    """

    def __init__(
        self,
        client: Any,
        *,
        expiration: int | float | timedelta | ExpirationFn | None = None,
        cache_key: CacheKeyFn | None = None,
        skip_cache: SkipCacheFn | None = None,
        ui: LineWriter | None = None,
        health_check_interval: float = 5.0,
    ) -> None:
        self._client = client
        self._options = CacheOptions.resolve(expiration=expiration, cache_key=cache_key, skip_cache=skip_cache)
        self._ui: LineWriter = ui if ui is not None else StructlogLineWriter(__name__)
        self._state = ConnectionState.DISCONNECTED

        self._monitor = ConnectionMonitor(client, health_check_interval=health_check_interval)
        self._monitor.subscribe(ConnectionEvent.CONNECT, self._on_connect)
        self._monitor.subscribe(ConnectionEvent.ERROR, self._on_error)
        self._monitor.subscribe(ConnectionEvent.END, self._on_end)

    @property
    def options(self) -> CacheOptions:
        return self._options

    @property
    def monitor(self) -> ConnectionMonitor:
        return self._monitor

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    def _on_connect(self) -> None:
        self._state = ConnectionState.CONNECTED
        self._ui.write_line("redis connected")

    def _on_error(self, error: BaseException) -> None:
        self._ui.write_line(f"redis error; err={error}")

    def _on_end(self) -> None:
        self._state = ConnectionState.DISCONNECTED
        self._ui.write_line("redis disconnected")

    async def fetch(self, path: str, request: Any = None) -> Any | None:
        """Return the cached body for *path*, or ``None`` on a miss.

        Raises:
            CacheSkippedException: ``skip_cache`` declined the lookup.
            StoreException: The Redis GET failed.
        """
        if not self.connected:
            return None

        path = normalize_path(path)
        if self._options.skip_cache(path, request):
            raise CacheSkippedException(path)

        key = self._options.cache_key(path, request)
        try:
            return await self._client.get(key)
        except RedisError as exc:
            raise StoreException("get", key, exc) from exc

    async def put(self, path: str, body: str | bytes, response: Any = None) -> None:
        """Store *body* under *path* with the configured TTL.

        Responses with a status code of 300 or above are not cached. The
        value and its TTL are written in one MULTI/EXEC transaction.

        Raises:
            StoreException: The transaction failed.
        """
        if not self.connected:
            return

        path = normalize_path(path)
        request = getattr(response, "request", None)
        status = getattr(response, "status_code", None)
        if status is not None and status >= 300:
            _logger.debug("Not caching '%s': status %s", path, status)
            return

        key = self._options.cache_key(path, request)
        ttl = self._options.expiration(path, request)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.set(key, body)
                pipe.expire(key, ttl)
                await pipe.execute()
        except RedisError as exc:
            raise StoreException("set", key, exc) from exc

    async def start(self) -> None:
        """Start connecting in the background."""
        self._monitor.start()

    async def stop(self) -> None:
        """Stop monitoring and close the underlying Redis connection."""
        await self._monitor.stop()
        await self._client.aclose()
