"""redcache kernel — exception hierarchy and lifecycle protocol."""

from redcache.kernel.exceptions import (
    CacheSkippedException,
    InfrastructureException,
    RedCacheException,
    StoreException,
)
from redcache.kernel.lifecycle import Lifecycle

__all__ = [
    "CacheSkippedException",
    "InfrastructureException",
    "Lifecycle",
    "RedCacheException",
    "StoreException",
]
