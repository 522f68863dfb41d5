import fnmatch

import pytest
from django.core.cache import cache as django_cache

from clinic.cache import CacheRepository, set_cache_repository


class InMemoryCacheRepository(CacheRepository):
    """Dictionary-backed cache store; records the TTL of every write."""

    def __init__(self, scan_count: int = 1) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.scan_count = scan_count
        self.closed = False

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        self.ttls.pop(key, None)

    def set_with_expiry(self, key, value, ttl):
        self.data[key] = value
        self.ttls[key] = ttl

    def delete(self, key):
        self.ttls.pop(key, None)
        return 1 if self.data.pop(key, None) is not None else 0

    def scan_by_prefix(self, pattern):
        keys = sorted(k for k in self.data if fnmatch.fnmatchcase(k, pattern))
        for start in range(0, len(keys), self.scan_count):
            yield keys[start:start + self.scan_count]

    def close(self):
        self.closed = True


@pytest.fixture
def memory_cache():
    return InMemoryCacheRepository()


@pytest.fixture(autouse=True)
def installed_cache(memory_cache):
    previous = set_cache_repository(memory_cache)
    yield memory_cache
    set_cache_repository(previous)


@pytest.fixture(autouse=True)
def clear_throttle_cache():
    django_cache.clear()
    yield
    django_cache.clear()
