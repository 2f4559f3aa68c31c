"""redcache cache — Redis-backed response cache."""

from redcache.cache.adapters.redis import RedisResponseCache
from redcache.cache.auto_configuration import create_response_cache
from redcache.cache.connection import ConnectionEvent, ConnectionMonitor, ConnectionState
from redcache.cache.options import DEFAULT_EXPIRATION, CacheOptions, normalize_path
from redcache.cache.ports.outbound import ResponseCache

__all__ = [
    "DEFAULT_EXPIRATION",
    "CacheOptions",
    "ConnectionEvent",
    "ConnectionMonitor",
    "ConnectionState",
    "RedisResponseCache",
    "ResponseCache",
    "create_response_cache",
    "normalize_path",
]
