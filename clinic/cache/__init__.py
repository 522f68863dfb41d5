"""
Cache layer for the clinic backend.

``repository`` wraps the key-value store, ``service`` maps domain
objects onto namespaced keys and ``connection`` owns the process-wide
store handle.
"""
from .exceptions import CacheError, CacheUnavailable, MalformedCachePayload
from .repository import CacheRepository, RedisRepository
from .service import CachePrefix, CacheService
from .connection import (
    cache_repository,
    get_cache_repository,
    get_cache_service,
    release_cache_repository,
    set_cache_repository,
)

__all__ = [
    'CacheError',
    'CacheUnavailable',
    'MalformedCachePayload',
    'CacheRepository',
    'RedisRepository',
    'CachePrefix',
    'CacheService',
    'cache_repository',
    'get_cache_repository',
    'get_cache_service',
    'release_cache_repository',
    'set_cache_repository',
]
