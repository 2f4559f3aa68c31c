"""redcache — Redis response cache for served assets."""

from redcache.cache import (
    DEFAULT_EXPIRATION,
    CacheOptions,
    ConnectionState,
    RedisResponseCache,
    ResponseCache,
    create_response_cache,
    normalize_path,
)
from redcache.core.config import Config
from redcache.kernel.exceptions import CacheSkippedException, RedCacheException, StoreException

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_EXPIRATION",
    "CacheOptions",
    "CacheSkippedException",
    "Config",
    "ConnectionState",
    "RedCacheException",
    "RedisResponseCache",
    "ResponseCache",
    "StoreException",
    "create_response_cache",
    "normalize_path",
]
