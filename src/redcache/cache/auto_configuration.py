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
"""Response cache auto-configuration."""

from __future__ import annotations

from datetime import timedelta

import redis.asyncio as aioredis

from redcache.cache.adapters.redis import RedisResponseCache
from redcache.cache.options import CacheKeyFn, ExpirationFn, SkipCacheFn
from redcache.config.properties.cache import CacheProperties
from redcache.core.config import Config
from redcache.logging.port import LineWriter

_URL_OWNED = ("host", "port", "db")


def create_redis_client(props: CacheProperties) -> aioredis.Redis:
    """Build a ``redis.asyncio`` client from the configured connection parameters.

    With ``url`` set, the URL owns host/port/db; every other parameter is
    passed through alongside it.
    """
    redis_props = props.redis
    kwargs = redis_props.client_kwargs()
    if redis_props.url:
        for name in _URL_OWNED:
            kwargs.pop(name, None)
        return aioredis.from_url(redis_props.url, **kwargs)
    return aioredis.Redis(**kwargs)


def create_response_cache(
    config: Config,
    *,
    ui: LineWriter | None = None,
    expiration: int | float | timedelta | ExpirationFn | None = None,
    cache_key: CacheKeyFn | None = None,
    skip_cache: SkipCacheFn | None = None,
) -> RedisResponseCache:
    """Build a :class:`RedisResponseCache` from the ``redcache.cache`` section.

    An explicit *expiration* wins over the configured one. The adapter is
    returned unstarted; call ``await cache.start()`` to begin connecting.
    """
    props = config.bind(CacheProperties)
    return RedisResponseCache(
        create_redis_client(props),
        expiration=expiration if expiration is not None else props.expiration,
        cache_key=cache_key,
        skip_cache=skip_cache,
        ui=ui,
        health_check_interval=props.health_check_interval,
    )
