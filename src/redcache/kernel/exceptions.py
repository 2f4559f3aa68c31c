"""Exception hierarchy for redcache.

All library exceptions inherit from RedCacheException, so callers can catch
the base class or a specific subclass.

Categories:
- CacheSkippedException: a fetch was declined by the ``skip_cache`` policy
- InfrastructureException: store and network failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class RedCacheException(Exception):
    """Base exception for all redcache errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "STORE_ERROR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Policy Exceptions
# =============================================================================


class CacheSkippedException(RedCacheException):
    """The ``skip_cache`` predicate declined a fetch.

    Not a store failure: the store was never contacted.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"cache skipped for '{path}'", code="CACHE_SKIPPED", context={"path": path})


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(RedCacheException):
    """Infrastructure failures: store, network."""


class StoreException(InfrastructureException):
    """A store operation failed.

    The original client error is available as ``__cause__``.
    """

    def __init__(self, operation: str, key: str, error: BaseException) -> None:
        super().__init__(
            f"store {operation} failed for key '{key}': {error}",
            code="STORE_ERROR",
            context={"operation": operation, "key": key},
        )
