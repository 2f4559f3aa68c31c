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
"""Cache options: path normalization and key/expiration/skip policies."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

DEFAULT_EXPIRATION = 300

ExpirationFn = Callable[[str, Any], int]
CacheKeyFn = Callable[[str, Any], str]
SkipCacheFn = Callable[[str, Any], bool]


def normalize_path(path: str) -> str:
    """Append a trailing slash unless *path* already ends with one."""
    return path if path.endswith("/") else f"{path}/"


def _identity_key(path: str, request: Any) -> str:
    return path


def _never_skip(path: str, request: Any) -> bool:
    return False


def _constant_expiration(seconds: int) -> ExpirationFn:
    def expiration(path: str, request: Any) -> int:
        return seconds

    return expiration


def _to_seconds(value: int | float | timedelta) -> int:
    seconds = int(value.total_seconds()) if isinstance(value, timedelta) else int(value)
    if seconds <= 0:
        raise ValueError(f"expiration must be a positive number of seconds, got {value!r}")
    return seconds


@dataclass(frozen=True)
class CacheOptions:
    """Resolved cache behaviour, every policy a ``(path, request)`` callable.

    Build instances with :meth:`resolve`, which accepts either constants or
    callables and never mutates what it is given.
    """

    expiration: ExpirationFn
    cache_key: CacheKeyFn
    skip_cache: SkipCacheFn

    @classmethod
    def resolve(
        cls,
        expiration: int | float | timedelta | ExpirationFn | None = None,
        cache_key: CacheKeyFn | None = None,
        skip_cache: SkipCacheFn | None = None,
    ) -> CacheOptions:
        if expiration is None:
            expiration_fn = _constant_expiration(DEFAULT_EXPIRATION)
        elif isinstance(expiration, bool):
            raise TypeError("expiration must be seconds, a timedelta or a callable, not bool")
        elif isinstance(expiration, (int, float, timedelta)):
            expiration_fn = _constant_expiration(_to_seconds(expiration))
        elif callable(expiration):
            expiration_fn = expiration
        else:
            raise TypeError(f"expiration must be seconds, a timedelta or a callable, got {type(expiration).__name__}")

        if cache_key is not None and not callable(cache_key):
            raise TypeError(f"cache_key must be callable, got {type(cache_key).__name__}")
        if skip_cache is not None and not callable(skip_cache):
            raise TypeError(f"skip_cache must be callable, got {type(skip_cache).__name__}")

        return cls(
            expiration=expiration_fn,
            cache_key=cache_key or _identity_key,
            skip_cache=skip_cache or _never_skip,
        )
