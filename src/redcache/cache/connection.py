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
"""Connection monitor — lifecycle notifications for a Redis client.

``redis.asyncio`` connects lazily and has no event callbacks, so the
monitor pings the server on a fixed interval and reports transitions as
``connect`` / ``error`` / ``end`` events. Handlers run on the monitor task,
one at a time.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from redis.exceptions import RedisError

_logger = logging.getLogger(__name__)

ConnectionHandler = Callable[..., None]


class ConnectionEvent(str, Enum):
    CONNECT = "connect"
    ERROR = "error"
    END = "end"


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class ConnectionMonitor:
    """Pings a ``redis.asyncio.Redis``-like client and emits lifecycle events.

    - ``connect``: the first successful ping, and the first one after a drop.
    - ``error``: every failed ping, with the exception as the only argument.
    - ``end``: a failed ping while connected, or :meth:`stop` while connected.
    """

    def __init__(self, client: Any, health_check_interval: float = 5.0) -> None:
        self._client = client
        self._interval = health_check_interval
        self._handlers: dict[ConnectionEvent, list[ConnectionHandler]] = {event: [] for event in ConnectionEvent}
        self._connected = False
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, event: ConnectionEvent | str, handler: ConnectionHandler) -> None:
        """Register *handler* for *event*."""
        self._handlers[ConnectionEvent(event)].append(handler)

    def start(self) -> None:
        """Spawn the ping loop on the running event loop. Returns immediately."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the ping loop; emits ``end`` if the client was connected."""
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        if self._connected:
            self._connected = False
            self._emit(ConnectionEvent.END)

    async def check(self) -> None:
        """Run a single ping and emit whatever transition it causes."""
        try:
            await self._client.ping()
        except (RedisError, OSError) as exc:
            self._emit(ConnectionEvent.ERROR, exc)
            if self._connected:
                self._connected = False
                self._emit(ConnectionEvent.END)
        else:
            if not self._connected:
                self._connected = True
                self._emit(ConnectionEvent.CONNECT)

    async def _run(self) -> None:
        while True:
            await self.check()
            await asyncio.sleep(self._interval)

    def _emit(self, event: ConnectionEvent, *args: Any) -> None:
        _logger.debug("Connection event '%s'", event.value)
        for handler in self._handlers[event]:
            handler(*args)
