from typing import Generic, Iterable, Optional, Sequence, Type, TypeVar

from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """ORM-backed CRUD primitives shared by the per-model repositories."""

    related: Sequence[str] = ()
    ordering: Sequence[str] = ()

    def __init__(self, model: Type[T]):
        self.model = model

    def _base_queryset(self):
        qs = self.model.objects.all()
        if self.related:
            qs = qs.select_related(*self.related)
        if self.ordering:
            qs = qs.order_by(*self.ordering)
        return qs

    def get(self, **filters) -> Optional[T]:
        return self._base_queryset().filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self._base_queryset().filter(**filters)

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        for k, v in data.items():
            setattr(obj, k, v)
        obj.save()
        return obj

    def delete(self, obj: T) -> None:
        obj.delete()
