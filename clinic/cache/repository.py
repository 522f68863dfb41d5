"""
Key-value store adapter.

:class:`CacheRepository` is the minimal interface the rest of the app
relies on; :class:`RedisRepository` implements it over a ``redis-py``
client that is handed in at construction and owned by
:mod:`clinic.cache.connection`.
"""
from __future__ import annotations

import abc
import functools
import logging
from typing import Iterator, Optional

from redis import exceptions as redis_exceptions

from .exceptions import CacheUnavailable

logger = logging.getLogger(__name__)

DEFAULT_SCAN_COUNT = 100


class CacheRepository(abc.ABC):
    """get/set/delete/scan with optional expiry."""

    @abc.abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abc.abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abc.abstractmethod
    def set_with_expiry(self, key: str, value: str, ttl: int) -> None:
        ...

    @abc.abstractmethod
    def delete(self, key: str) -> int:
        ...

    @abc.abstractmethod
    def scan_by_prefix(self, pattern: str) -> Iterator[list[str]]:
        ...

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        return None


def _unavailable_on_connection_errors(func):
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError) as exc:
            logger.warning("cache store unavailable during %s: %s", func.__name__, exc)
            raise CacheUnavailable(str(exc)) from exc
    return wrapper


def _decode(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode('utf-8')
    return str(value)


def check_ttl(ttl: int) -> int:
    # redis rejects EX 0; a key without expiry is written with set()
    if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0:
        raise ValueError(f"ttl must be a positive number of seconds, got {ttl!r}")
    return ttl


class RedisRepository(CacheRepository):
    """Redis implementation of :class:`CacheRepository`.

    Network failures surface as :class:`CacheUnavailable`; a missing key
    is ``None``, not an error.  Values are returned as ``str`` whether
    or not the client decodes responses itself.
    """

    def __init__(self, client, *, scan_count: int = DEFAULT_SCAN_COUNT) -> None:
        self.client = client
        self.scan_count = scan_count

    @_unavailable_on_connection_errors
    def get(self, key: str) -> Optional[str]:
        return _decode(self.client.get(key))

    @_unavailable_on_connection_errors
    def set(self, key: str, value: str) -> None:
        self.client.set(key, value)

    @_unavailable_on_connection_errors
    def set_with_expiry(self, key: str, value: str, ttl: int) -> None:
        self.client.set(key, value, ex=check_ttl(ttl))

    @_unavailable_on_connection_errors
    def delete(self, key: str) -> int:
        return int(self.client.delete(key))

    def scan_by_prefix(self, pattern: str) -> Iterator[list[str]]:
        """Yield batches of keys matching ``pattern``, one per SCAN round-trip.

        Batches may be empty.  The scan gives no snapshot guarantee: keys
        written or expired meanwhile may or may not show up.
        """
        cursor = 0
        while True:
            cursor, keys = self._scan_step(cursor, pattern)
            yield [_decode(k) for k in keys]
            if int(cursor) == 0:
                return

    @_unavailable_on_connection_errors
    def _scan_step(self, cursor, pattern: str):
        return self.client.scan(cursor=cursor, match=pattern, count=self.scan_count)

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError):
            return False

    def close(self) -> None:
        self.client.close()
