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
"""Cache adapter configuration properties."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from redcache.core.config import config_properties


class RedisProperties(BaseModel):
    """Connection parameters handed to ``redis.asyncio`` untouched.

    When ``url`` is set it takes precedence over host/port/db. Keys not
    declared here (``socket_timeout``, ``ssl``, ...) are kept and passed
    through as well.
    """

    model_config = ConfigDict(extra="allow")

    url: str | None = None
    host: str = "localhost"
    port: int = Field(default=6379, ge=1, le=65535)
    db: int = Field(default=0, ge=0)
    username: str | None = None
    password: str | None = None
    decode_responses: bool = True

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the client, without ``url`` and unset credentials."""
        kwargs = self.model_dump(exclude={"url"})
        for name in ("username", "password"):
            if kwargs.get(name) is None:
                kwargs.pop(name, None)
        return kwargs


@config_properties(prefix="redcache.cache")
class CacheProperties(BaseModel):
    """Configuration for the response cache (redcache.cache.*)."""

    expiration: int = Field(default=300, gt=0)
    health_check_interval: float = Field(default=5.0, gt=0)
    redis: RedisProperties = Field(default_factory=RedisProperties)
