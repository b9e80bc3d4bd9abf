# (c) Nelen & Schuurmans

from collections.abc import Sequence
from typing import Generic
from typing import List
from typing import TypeVar

from bookshelf.base.domain import DoesNotExist
from bookshelf.base.domain import Entity
from bookshelf.base.domain import Filter
from bookshelf.base.domain import Id
from bookshelf.base.domain import Json
from bookshelf.base.domain import Query
from bookshelf.base.domain import Repository

T = TypeVar("T", bound=Entity)

__all__ = ["Manage"]


class Manage(Generic[T]):
    repo: Repository[T]
    entity: type[T]

    def __init__(self, repo: Repository[T] | None = None):
        assert repo is not None
        self.repo = repo

    def __init_subclass__(cls) -> None:
        (base,) = cls.__orig_bases__  # type: ignore
        (entity,) = base.__args__
        assert issubclass(entity, Entity)
        super().__init_subclass__()
        cls.entity = entity

    async def retrieve(self, id: Id) -> T:
        result = await self.repo.get(id)
        if result is None:
            raise DoesNotExist(self.entity.__name__.lower(), id)
        return result

    async def create(self, values: Json) -> T:
        item = self.entity.create(**values)
        id_ = await self.repo.add(item)
        return item.update(id=id_)

    async def create_many(self, values: Sequence[Json]) -> List[Id]:
        return await self.repo.add_many([self.entity.create(**x) for x in values])

    async def update(self, id: Id, values: Json) -> T:
        """Replace the record with ``id`` by ``values``.

        Fields missing from ``values`` take their defaults; this is not a patch.
        """
        item = self.entity.create(**{**values, "id": id})
        await self.repo.update(item)
        return item

    async def destroy(self, id: Id) -> bool:
        return await self.repo.remove(id)

    async def list(self) -> List[T]:
        return await self.repo.all()

    async def filter(self, filters: List[Filter]) -> List[T]:
        return await self.repo.filter(filters)

    async def count(self, filters: List[Filter]) -> int:
        return await self.repo.count(filters)

    async def exists(self, filters: List[Filter]) -> bool:
        return await self.repo.exists(filters)

    def query(self, include: str | None = None) -> Query[T]:
        return self.repo.query(include)
