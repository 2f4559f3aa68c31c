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
"""Tests for RedisResponseCache using a FakeRedis stub."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from redcache.cache.adapters.redis import RedisResponseCache
from redcache.cache.connection import ConnectionState
from redcache.cache.ports.outbound import ResponseCache
from redcache.kernel.exceptions import CacheSkippedException, StoreException
from redcache.kernel.lifecycle import Lifecycle


class FakePipeline:
    """Buffers SET/EXPIRE and applies them together on execute()."""

    def __init__(self, redis: FakeRedis) -> None:
        self._redis = redis
        self._commands: list[tuple[str, tuple]] = []

    async def __aenter__(self) -> FakePipeline:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self._commands.clear()

    def set(self, key: str, value: Any) -> FakePipeline:
        self._commands.append(("set", (key, value)))
        return self

    def expire(self, key: str, seconds: int) -> FakePipeline:
        self._commands.append(("expire", (key, seconds)))
        return self

    async def execute(self) -> list[bool]:
        self._redis.executed.append(list(self._commands))
        if self._redis.fail_writes:
            raise ResponseError("EXECABORT Transaction discarded because of previous errors.")
        for name, args in self._commands:
            if name == "set":
                self._redis.store[args[0]] = args[1]
            else:
                self._redis.ttls[args[0]] = args[1]
        return [True] * len(self._commands)


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface."""

    def __init__(self) -> None:
        self.store: dict[str, Any] = {}
        self.ttls: dict[str, int] = {}
        self.executed: list[list[tuple[str, tuple]]] = []
        self.get_calls: list[str] = []
        self.fail_reads = False
        self.fail_writes = False
        self.reachable = True
        self.closed = False

    async def ping(self) -> bool:
        if not self.reachable:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")
        return True

    async def get(self, key: str) -> Any | None:
        self.get_calls.append(key)
        if self.fail_reads:
            raise RedisConnectionError("Connection reset by peer")
        return self.store.get(key)

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        assert transaction is True
        return FakePipeline(self)

    async def aclose(self) -> None:
        self.closed = True


class RecordingWriter:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def write_line(self, line: str) -> None:
        self.lines.append(line)


@dataclass
class Response:
    status_code: int
    request: Any = None


async def _connected_cache(**kwargs: Any) -> tuple[RedisResponseCache, FakeRedis, RecordingWriter]:
    fake = FakeRedis()
    ui = RecordingWriter()
    cache = RedisResponseCache(fake, ui=ui, **kwargs)
    await cache.monitor.check()
    return cache, fake, ui


class TestProtocols:
    def test_is_response_cache(self):
        assert isinstance(RedisResponseCache(FakeRedis(), ui=RecordingWriter()), ResponseCache)

    def test_is_lifecycle(self):
        assert isinstance(RedisResponseCache(FakeRedis(), ui=RecordingWriter()), Lifecycle)


class TestConnectionState:
    def test_starts_disconnected(self):
        cache = RedisResponseCache(FakeRedis(), ui=RecordingWriter())
        assert cache.connected is False
        assert cache.state is ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_connect_event_sets_connected_and_logs(self):
        cache, _, ui = await _connected_cache()
        assert cache.connected is True
        assert cache.state is ConnectionState.CONNECTED
        assert ui.lines == ["redis connected"]

    @pytest.mark.asyncio
    async def test_error_event_logs_without_changing_state(self):
        fake = FakeRedis()
        fake.reachable = False
        ui = RecordingWriter()
        cache = RedisResponseCache(fake, ui=ui)
        await cache.monitor.check()
        assert cache.connected is False
        assert ui.lines == ["redis error; err=Error 111 connecting to localhost:6379. Connection refused."]

    @pytest.mark.asyncio
    async def test_end_event_sets_disconnected_and_logs(self):
        cache, fake, ui = await _connected_cache()
        fake.reachable = False
        await cache.monitor.check()
        assert cache.connected is False
        assert ui.lines[-1] == "redis disconnected"
        assert ui.lines[-2].startswith("redis error; err=")

    @pytest.mark.asyncio
    async def test_stop_disconnects_and_closes_client(self):
        cache, fake, ui = await _connected_cache()
        await cache.stop()
        assert cache.connected is False
        assert fake.closed is True
        assert ui.lines == ["redis connected", "redis disconnected"]


class TestDisconnected:
    @pytest.mark.asyncio
    async def test_fetch_is_noop(self):
        fake = FakeRedis()
        cache = RedisResponseCache(fake, ui=RecordingWriter())
        assert await cache.fetch("/a") is None
        assert fake.get_calls == []

    @pytest.mark.asyncio
    async def test_put_is_noop(self):
        fake = FakeRedis()
        cache = RedisResponseCache(fake, ui=RecordingWriter())
        await cache.put("/a", "body", Response(200))
        assert fake.executed == []
        assert fake.store == {}

    @pytest.mark.asyncio
    async def test_skip_predicate_not_consulted(self):
        cache = RedisResponseCache(FakeRedis(), ui=RecordingWriter(), skip_cache=lambda p, r: True)
        assert await cache.fetch("/a") is None


class TestFetch:
    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self):
        cache, _, _ = await _connected_cache()
        assert await cache.fetch("/missing", object()) is None

    @pytest.mark.asyncio
    async def test_lookup_uses_normalized_path(self):
        cache, fake, _ = await _connected_cache()
        fake.store["/a/"] = "hit"
        assert await cache.fetch("/a") == "hit"
        assert await cache.fetch("/a/") == "hit"
        assert fake.get_calls == ["/a/", "/a/"]

    @pytest.mark.asyncio
    async def test_skip_cache_raises_without_store_call(self):
        seen: list[tuple[str, Any]] = []
        request = object()

        def skip(path: str, req: Any) -> bool:
            seen.append((path, req))
            return True

        cache, fake, _ = await _connected_cache(skip_cache=skip)
        with pytest.raises(CacheSkippedException) as exc_info:
            await cache.fetch("/a", request)
        assert exc_info.value.code == "CACHE_SKIPPED"
        assert exc_info.value.context == {"path": "/a/"}
        assert seen == [("/a/", request)]
        assert fake.get_calls == []

    @pytest.mark.asyncio
    async def test_store_error_is_wrapped(self):
        cache, fake, _ = await _connected_cache()
        fake.fail_reads = True
        with pytest.raises(StoreException) as exc_info:
            await cache.fetch("/a")
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)
        assert exc_info.value.context == {"operation": "get", "key": "/a/"}

    @pytest.mark.asyncio
    async def test_skipped_is_not_a_store_error(self):
        cache, _, _ = await _connected_cache(skip_cache=lambda p, r: True)
        with pytest.raises(CacheSkippedException):
            await cache.fetch("/a")
        assert not issubclass(CacheSkippedException, StoreException)


class TestPut:
    @pytest.mark.asyncio
    async def test_round_trip_with_ttl(self):
        cache, fake, _ = await _connected_cache(expiration=60)
        await cache.put("/a", "body1", Response(200))
        assert await cache.fetch("/a", object()) == "body1"
        assert fake.ttls == {"/a/": 60}

    @pytest.mark.asyncio
    async def test_default_ttl_is_five_minutes(self):
        cache, fake, _ = await _connected_cache()
        await cache.put("/a", "body", Response(200))
        assert fake.ttls["/a/"] == 300

    @pytest.mark.asyncio
    async def test_timedelta_expiration(self):
        cache, fake, _ = await _connected_cache(expiration=timedelta(minutes=2))
        await cache.put("/a", "body", Response(200))
        assert fake.ttls["/a/"] == 120

    @pytest.mark.asyncio
    async def test_custom_cache_key(self):
        cache, fake, _ = await _connected_cache(cache_key=lambda p, r: "pfx:" + p)
        await cache.put("/x", "v", Response(200))
        assert fake.store == {"pfx:/x/": "v"}

    @pytest.mark.asyncio
    async def test_set_and_expire_in_one_transaction(self):
        cache, fake, _ = await _connected_cache(expiration=60)
        await cache.put("/a", b"bytes", Response(200))
        assert fake.executed == [[("set", ("/a/", b"bytes")), ("expire", ("/a/", 60))]]

    @pytest.mark.asyncio
    async def test_callables_receive_request_from_response(self):
        request = {"host": "example.com"}
        keys: list[tuple[str, Any]] = []
        ttls: list[tuple[str, Any]] = []

        def cache_key(path: str, req: Any) -> str:
            keys.append((path, req))
            return req["host"] + path

        def expiration(path: str, req: Any) -> int:
            ttls.append((path, req))
            return 10

        cache, fake, _ = await _connected_cache(cache_key=cache_key, expiration=expiration)
        await cache.put("/a", "body", Response(200, request=request))
        assert keys == [("/a/", request)]
        assert ttls == [("/a/", request)]
        assert fake.ttls == {"example.com/a/": 10}

    @pytest.mark.asyncio
    async def test_without_response_writes(self):
        cache, fake, _ = await _connected_cache()
        await cache.put("/a", "body")
        assert fake.store == {"/a/": "body"}

    @pytest.mark.asyncio
    async def test_response_without_status_code_writes(self):
        class RequestOnlyResponse:
            def __init__(self, request: Any) -> None:
                self.request = request

        request = {"host": "example.com"}
        cache, fake, _ = await _connected_cache(cache_key=lambda p, r: r["host"] + p)
        await cache.put("/a", "body", RequestOnlyResponse(request))
        assert fake.store == {"example.com/a/": "body"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [300, 301, 404, 500])
    async def test_non_cacheable_status_skips_write(self, status: int):
        cache, fake, _ = await _connected_cache()
        await cache.put("/a", "body", Response(status))
        assert fake.executed == []

    @pytest.mark.asyncio
    async def test_store_error_is_wrapped(self):
        cache, fake, _ = await _connected_cache()
        fake.fail_writes = True
        with pytest.raises(StoreException) as exc_info:
            await cache.put("/a", "body", Response(200))
        assert isinstance(exc_info.value.__cause__, ResponseError)
        assert exc_info.value.code == "STORE_ERROR"
        assert fake.store == {}
