"""Typed configuration property classes."""

from redcache.config.properties.cache import CacheProperties, RedisProperties
from redcache.config.properties.logging import LoggingProperties

__all__ = [
    "CacheProperties",
    "LoggingProperties",
    "RedisProperties",
]
