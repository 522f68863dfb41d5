"""Errors raised by the cache layer."""


class CacheError(Exception):
    """Base class for cache store failures."""


class CacheUnavailable(CacheError):
    """The cache store could not be reached (connection or timeout)."""


class MalformedCachePayload(CacheError, ValueError):
    """A cached value could not be decoded as the expected JSON payload."""

    def __init__(self, key, payload, message: str = 'invalid JSON payload') -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
        self.payload = payload
