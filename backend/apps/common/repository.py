from typing import Type, TypeVar, Generic, Iterable, Optional
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    def __init__(self, model: Type[T]):
        self.model = model

    def _base_queryset(self):
        return self.model.objects.all()

    def get(self, **filters) -> Optional[T]:
        return self._base_queryset().filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self._base_queryset().filter(**filters)

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def count(self, **filters) -> int:
        return self.model.objects.filter(**filters).count()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        for k, v in data.items():
            setattr(obj, k, v)
        obj.save()
        return obj

    def delete(self, obj: T):
        obj.delete()

    def delete_where(self, **filters) -> int:
        deleted, _ = self.model.objects.filter(**filters).delete()
        return deleted
