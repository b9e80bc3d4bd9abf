# (c) Nelen & Schuurmans

from collections.abc import Sequence
from typing import Generic
from typing import TypeVar

from .entity import Entity
from .exceptions import BadRequest
from .filter import Filter
from .gateway import Gateway
from .query import Query
from .types import Id

__all__ = ["Repository"]

T = TypeVar("T", bound=Entity)


class Repository(Generic[T]):
    """CRUD over one entity type. Every write is committed before returning."""

    entity: type[T]

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def __init_subclass__(cls) -> None:
        (base,) = cls.__orig_bases__  # type: ignore
        (entity,) = base.__args__
        super().__init_subclass__()
        cls.entity = entity

    def _to_insert(self, item: T) -> dict:
        record = item.to_record()
        record.pop("id", None)
        return record

    async def add(self, item: T) -> Id:
        if item is None:
            raise BadRequest(f"cannot add: {self.entity.__name__} is required")
        created = await self.gateway.add(self._to_insert(item))
        return created["id"]

    async def add_many(self, items: Sequence[T]) -> list[Id]:
        if items is None:
            raise BadRequest(f"cannot add: {self.entity.__name__} list is required")
        items = list(items)
        if not items:
            return []
        created = await self.gateway.add_many([self._to_insert(x) for x in items])
        return [x["id"] for x in created]

    async def update(self, item: T) -> Id:
        if item is None:
            raise BadRequest(f"cannot update: {self.entity.__name__} is required")
        updated = await self.gateway.update(item.to_record())
        return updated["id"]

    async def remove(self, id: Id) -> bool:
        return await self.gateway.remove(id)

    async def get(self, id: Id) -> T | None:
        res = await self.gateway.get(id)
        if res is None:
            return None
        return self.entity(**res)

    async def all(self) -> list[T]:
        return await self.filter([])

    async def filter(self, filters: list[Filter]) -> list[T]:
        records = await self.gateway.filter(filters, params=None)
        return [self.entity(**x) for x in records]

    async def count(self, filters: list[Filter]) -> int:
        return await self.gateway.count(filters)

    async def exists(self, filters: list[Filter]) -> bool:
        return await self.gateway.exists(filters)

    def query(self, include: str | None = None) -> Query[T]:
        return Query(self, include=include)
