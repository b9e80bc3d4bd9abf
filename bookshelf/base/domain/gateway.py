# (c) Nelen & Schuurmans

from abc import ABC
from collections.abc import Sequence

from .filter import Filter
from .pagination import QueryOptions
from .types import Id
from .types import Json

__all__ = ["Gateway"]


class Gateway(ABC):
    async def filter(
        self,
        filters: list[Filter],
        params: QueryOptions | None = None,
        include: str | None = None,
    ) -> list[Json]:
        raise NotImplementedError()

    async def count(self, filters: list[Filter]) -> int:
        return len(await self.filter(filters, params=None))

    async def exists(self, filters: list[Filter]) -> bool:
        return len(await self.filter(filters, params=QueryOptions(limit=1))) > 0

    async def get(self, id: Id) -> Json | None:
        result = await self.filter([Filter.for_id(id)], params=None)
        return result[0] if result else None

    async def add(self, item: Json) -> Json:
        raise NotImplementedError()

    async def add_many(self, items: Sequence[Json]) -> list[Json]:
        return [await self.add(x) for x in items]

    async def update(self, item: Json) -> Json:
        raise NotImplementedError()

    async def remove(self, id: Id) -> bool:
        raise NotImplementedError()
