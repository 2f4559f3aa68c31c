"""Cache adapters — concrete response cache implementations."""

from redcache.cache.adapters.redis import RedisResponseCache

__all__ = ["RedisResponseCache"]
