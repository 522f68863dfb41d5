"""
Process-wide ownership of the cache store handle.

The handle is acquired once, lazily, and released at interpreter exit
or when a management command leaves :func:`cache_repository`.  Tests
and alternative wiring install their own repository with
:func:`set_cache_repository`.
"""
from __future__ import annotations

import atexit
import contextlib
import logging
import threading
from typing import Iterator, Optional

import redis
from django.conf import settings

from .repository import CacheRepository, RedisRepository, DEFAULT_SCAN_COUNT
from .service import CacheService

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_repository: Optional[CacheRepository] = None
_atexit_registered = False


def _uses_django_redis(alias: str) -> bool:
    backend = settings.CACHES.get(alias, {}).get('BACKEND', '')
    return backend.startswith('django_redis.')


def _open_client():
    alias = getattr(settings, 'CACHE_STORE_ALIAS', 'default')
    if _uses_django_redis(alias):
        from django_redis import get_redis_connection

        logger.debug("sharing django-redis connection pool of cache %r", alias)
        return get_redis_connection(alias)
    timeout = getattr(settings, 'CACHE_STORE_TIMEOUT', 3)
    return redis.Redis.from_url(
        settings.CACHE_STORE_URL,
        decode_responses=True,
        socket_connect_timeout=timeout,
        socket_timeout=timeout,
    )


def get_cache_repository() -> CacheRepository:
    global _repository, _atexit_registered
    with _lock:
        if _repository is None:
            _repository = RedisRepository(
                _open_client(),
                scan_count=getattr(settings, 'CACHE_SCAN_COUNT', DEFAULT_SCAN_COUNT),
            )
            logger.info("cache store acquired")
            if not _atexit_registered:
                atexit.register(release_cache_repository)
                _atexit_registered = True
        return _repository


def set_cache_repository(repository: Optional[CacheRepository]) -> Optional[CacheRepository]:
    """Install ``repository`` as the process-wide handle and return the previous one."""
    global _repository
    with _lock:
        previous, _repository = _repository, repository
    return previous


def release_cache_repository() -> None:
    global _repository
    with _lock:
        repository, _repository = _repository, None
    if repository is not None:
        repository.close()
        logger.info("cache store released")


@contextlib.contextmanager
def cache_repository() -> Iterator[CacheRepository]:
    """Acquire the cache store for the duration of the block."""
    repository = get_cache_repository()
    try:
        yield repository
    finally:
        release_cache_repository()


def get_cache_service() -> CacheService:
    return CacheService(get_cache_repository())
