"""
Shared create/get/list/edit/delete flow for the resource services.

A service is built around one repository and, optionally, a
:class:`~clinic.cache.CacheService`.  Single records are read through
the cache at ``"<prefix>:<id>"`` and the unfiltered list at the bare
collection prefix; writes drop both keys.  A cache outage is logged
and the request is served from the database.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Tuple

from rest_framework.exceptions import NotFound

from clinic.cache import CachePrefix, CacheService, CacheUnavailable, MalformedCachePayload
from clinic.repositories import ModelRepository

logger = logging.getLogger(__name__)


class CrudService:
    serializer_class = None
    entity_prefix: Optional[CachePrefix] = None
    collection_prefix: Optional[CachePrefix] = None
    label = 'record'

    def __init__(self, repository: ModelRepository, cache: Optional[CacheService] = None) -> None:
        self.repository = repository
        self.cache = cache

    # -- helpers ------------------------------------------------------------
    def serialize(self, instance) -> dict:
        return dict(self.serializer_class(instance).data)

    def _cache_call(self, method: str, *args) -> Any:
        if self.cache is None:
            return None
        try:
            return getattr(self.cache, method)(*args)
        except CacheUnavailable as exc:
            logger.warning("%s cache %s skipped: %s", self.label, method, exc)
            return None

    @staticmethod
    def _decode(key: str, payload: str) -> Any:
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise MalformedCachePayload(key, payload, str(exc)) from exc

    def invalidate(self, pk) -> None:
        if self.entity_prefix is not None:
            self._cache_call('remove_entity', self.entity_prefix, pk)
        if self.collection_prefix is not None:
            self._cache_call('remove_collection', self.collection_prefix)

    # -- operations ---------------------------------------------------------
    def get_instance(self, pk):
        instance = self.repository.find_one(pk)
        if instance is None:
            raise NotFound(f'{self.label} {pk} not found')
        return instance

    def create(self, data: Mapping[str, Any]) -> dict:
        instance = self.repository.create(self.prepare(data))
        if self.collection_prefix is not None:
            self._cache_call('remove_collection', self.collection_prefix)
        return self.serialize(instance)

    def get(self, pk) -> dict:
        if self.entity_prefix is not None:
            cached = self._cache_call('find_entity', self.entity_prefix, pk)
            if cached is not None:
                return self._decode(CacheService.key(self.entity_prefix, pk), cached)
        data = self.serialize(self.get_instance(pk))
        if self.entity_prefix is not None:
            self._cache_call('save_entity', self.entity_prefix, data)
        return data

    def get_all(self, filters: Optional[Mapping[str, Any]] = None, *, page: int = 1,
                page_size: Optional[int] = None) -> Tuple[list[dict], int]:
        cacheable = self.collection_prefix is not None and not filters and not page_size
        if cacheable:
            cached = self._cache_call('find_collection', self.collection_prefix)
            if cached is not None:
                items = self._decode(CacheService.key(self.collection_prefix), cached)
                return items, len(items)
        instances, total = self.repository.find(filters, page=page, page_size=page_size)
        items = [self.serialize(i) for i in instances]
        if cacheable:
            self._cache_call('save_collection', self.collection_prefix, items)
        return items, total

    def edit(self, pk, data: Mapping[str, Any]) -> dict:
        self.get_instance(pk)
        fields = self.prepare(data)
        if fields:
            self.repository.update(pk, fields)
        self.invalidate(pk)
        return self.serialize(self.get_instance(pk))

    def delete(self, pk) -> int:
        self.get_instance(pk)
        removed = self.repository.remove(pk)
        self.invalidate(pk)
        return removed

    def prepare(self, data: Mapping[str, Any]) -> dict:
        """Hook turning validated input into model fields."""
        return dict(data)
