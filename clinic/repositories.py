"""
Storage capabilities used by the services.

Each role (create, read, update, delete) is its own interface so a
service states exactly what it needs from storage.  ``ModelRepository``
implements all four over a Django model; services receive one at
construction (see :mod:`clinic.services`).
"""
from __future__ import annotations

import abc
from typing import Any, Generic, Iterable, Mapping, Optional, Tuple, TypeVar, Union

from django.db import models
from django.utils import timezone

M = TypeVar('M', bound=models.Model)
# keyword lookups or a Q expression
Filters = Union[Mapping[str, Any], models.Q, None]


class CreateRepository(abc.ABC, Generic[M]):
    @abc.abstractmethod
    def create(self, fields: Mapping[str, Any]) -> M:
        ...


class ReadRepository(abc.ABC, Generic[M]):
    @abc.abstractmethod
    def find(self, filters: Filters = None, *, page: int = 1,
             page_size: Optional[int] = None) -> Tuple[list[M], int]:
        ...

    @abc.abstractmethod
    def find_one(self, pk) -> Optional[M]:
        ...


class UpdateRepository(abc.ABC):
    @abc.abstractmethod
    def update(self, pk, fields: Mapping[str, Any]) -> int:
        """Write ``fields`` on the row ``pk`` and return the affected row count.

        Implementations over models with a ``modified_at`` column stamp it
        in the same statement, so a write of ``{"last_connected_at": ts}``
        also refreshes ``modified_at``.
        """


class DeleteRepository(abc.ABC):
    @abc.abstractmethod
    def remove(self, pk) -> int:
        ...


class ModelRepository(CreateRepository[M], ReadRepository[M], UpdateRepository, DeleteRepository):
    """Django ORM implementation of every repository role."""

    def __init__(self, model: type[M], *, ordering: Iterable[str] = ('-id',),
                 select_related: Iterable[str] = ()) -> None:
        self.model = model
        self.ordering = tuple(ordering)
        self.select_related = tuple(select_related)

    def queryset(self) -> models.QuerySet:
        qs = self.model.objects.all()
        if self.select_related:
            qs = qs.select_related(*self.select_related)
        return qs

    def create(self, fields: Mapping[str, Any]) -> M:
        return self.model.objects.create(**fields)

    def find(self, filters: Filters = None, *, page: int = 1,
             page_size: Optional[int] = None) -> Tuple[list[M], int]:
        qs = self.queryset()
        if isinstance(filters, models.Q):
            qs = qs.filter(filters)
        elif filters:
            qs = qs.filter(**filters)
        qs = qs.order_by(*self.ordering)
        total = qs.count()
        if page_size:
            start = (page - 1) * page_size
            qs = qs[start:start + page_size]
        return list(qs), total

    def find_one(self, pk) -> Optional[M]:
        return self.queryset().filter(pk=pk).first()

    def update(self, pk, fields: Mapping[str, Any]) -> int:
        fields = dict(fields)
        # QuerySet.update() skips auto_now, set it explicitly
        if any(f.name == 'modified_at' for f in self.model._meta.concrete_fields):
            fields.setdefault('modified_at', timezone.now())
        return self.model.objects.filter(pk=pk).update(**fields)

    def remove(self, pk) -> int:
        deleted, per_model = self.model.objects.filter(pk=pk).delete()
        return per_model.get(self.model._meta.label, 0)
