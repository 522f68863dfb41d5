"""
Entity cache on top of a :class:`~clinic.cache.repository.CacheRepository`.

Keys are ``"<prefix>:<id>"`` for single records and the bare prefix
for collections.  Payloads are complete JSON snapshots; every write
replaces the previous value and restarts its TTL.
"""
from __future__ import annotations

import enum
import json
from typing import Any, Iterator, Optional

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from .repository import CacheRepository

DEFAULT_TTL = 60


class CachePrefix(str, enum.Enum):
    USER = 'user'
    USERS = 'users'
    DOCTOR = 'doctor'
    DOCTORS = 'doctors'
    PATIENT = 'patient'
    PATIENTS = 'patients'
    LAST_CONNECTED_AT = 'last_connected_at'


def _dumps(value: Any) -> str:
    return json.dumps(value, cls=DjangoJSONEncoder)


class CacheService:
    """Encode entities to and from the cache store.

    Reads return the raw payload; decoding and validating it is the
    caller's job.
    """

    def __init__(self, repository: CacheRepository, ttl: Optional[int] = None) -> None:
        self.repository = repository
        self.ttl = ttl if ttl is not None else getattr(settings, 'CACHE_TTL', DEFAULT_TTL)

    @staticmethod
    def key(prefix: CachePrefix, pk=None) -> str:
        prefix = CachePrefix(prefix).value
        if pk is None:
            return prefix
        return f"{prefix}:{pk}"

    # -- single entities ----------------------------------------------------
    def save_entity(self, prefix: CachePrefix, entity: dict) -> None:
        self.repository.set_with_expiry(self.key(prefix, entity['id']), _dumps(entity), self.ttl)

    def find_entity(self, prefix: CachePrefix, pk) -> Optional[str]:
        return self.repository.get(self.key(prefix, pk))

    def remove_entity(self, prefix: CachePrefix, pk) -> int:
        return self.repository.delete(self.key(prefix, pk))

    # -- collections --------------------------------------------------------
    def save_collection(self, prefix: CachePrefix, entities: list) -> None:
        self.repository.set_with_expiry(self.key(prefix), _dumps(list(entities)), self.ttl)

    def find_collection(self, prefix: CachePrefix) -> Optional[str]:
        return self.repository.get(self.key(prefix))

    def remove_collection(self, prefix: CachePrefix) -> int:
        return self.repository.delete(self.key(prefix))

    # -- last connection ----------------------------------------------------
    @property
    def last_connected_ttl(self) -> int:
        # Kept as ttl squared (3600s with the default ttl of 60).
        return self.ttl * self.ttl

    def save_last_connected(self, pk) -> None:
        payload = {'id': pk, 'last_connected_at': int(timezone.now().timestamp())}
        self.repository.set_with_expiry(
            self.key(CachePrefix.LAST_CONNECTED_AT, pk), _dumps(payload), self.last_connected_ttl
        )

    def find_last_connected(self, key: str) -> Optional[str]:
        return self.repository.get(key)

    def scan_last_connected(self) -> Iterator[list[str]]:
        return self.repository.scan_by_prefix(f"{CachePrefix.LAST_CONNECTED_AT.value}:*")

    # -- users --------------------------------------------------------------
    def save_user(self, user: dict) -> None:
        self.save_entity(CachePrefix.USER, user)

    def find_user(self, pk) -> Optional[str]:
        return self.find_entity(CachePrefix.USER, pk)

    def save_users(self, users: list) -> None:
        self.save_collection(CachePrefix.USERS, users)

    def find_users(self) -> Optional[str]:
        return self.find_collection(CachePrefix.USERS)

    def remove_user(self, pk) -> int:
        return self.remove_entity(CachePrefix.USER, pk)
