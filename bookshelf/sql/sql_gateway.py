# (c) Nelen & Schuurmans
from collections.abc import AsyncIterator
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import TypeVar

import inject
from sqlalchemy import Table
from sqlalchemy.sql import Executable

from bookshelf.base.domain import BadRequest
from bookshelf.base.domain import DoesNotExist
from bookshelf.base.domain import Filter
from bookshelf.base.domain import Gateway
from bookshelf.base.domain import Id
from bookshelf.base.domain import Json
from bookshelf.base.domain import QueryOptions

from .sql_builder import SQLBuilder
from .sql_provider import SQLDatabase
from .sql_provider import SQLProvider

__all__ = ["SQLGateway"]


T = TypeVar("T", bound="SQLGateway")


class SQLGateway(Gateway):
    table: Table

    def __init__(
        self,
        provider_override: SQLProvider | None = None,
        nested: bool = False,
    ):
        self.provider_override = provider_override
        self.nested = nested
        self.builder = SQLBuilder(self.table)

    @property
    def provider(self):
        return self.provider_override or inject.instance(SQLDatabase)

    def __init_subclass__(cls, table: Table) -> None:
        cls.table = table
        super().__init_subclass__()

    @asynccontextmanager
    async def transaction(self: T) -> AsyncIterator[T]:
        if self.nested:
            yield self
        else:
            async with self.provider.transaction() as provider:
                yield self.__class__(provider, nested=True)

    async def get_related(self, items: list[Json], include: str) -> None:
        """Override this to eagerly load the relation named ``include`` into ``items``.

        It is called within the transaction of the main select.
        """
        raise BadRequest(f"cannot include '{include}'")

    async def execute(self, query: Executable) -> list[Json]:
        return await self.provider.execute(query)

    async def add(self, item: Json) -> Json:
        (result,) = await self.execute(self.builder.insert(item))
        return result

    async def add_many(self, items: Sequence[Json]) -> list[Json]:
        # one insert per item keeps the RETURNING order equal to the input order
        async with self.transaction() as transaction:
            return [await transaction.add(x) for x in items]

    async def update(self, item: Json) -> Json:
        id_ = item.get("id")
        if id_ is None:
            raise DoesNotExist("record", id_)
        result = await self.execute(self.builder.update(id_, item))
        if not result:
            raise DoesNotExist("record", id_)
        return result[0]

    async def remove(self, id: Id) -> bool:
        return bool(await self.execute(self.builder.delete(id)))

    async def filter(
        self,
        filters: list[Filter],
        params: QueryOptions | None = None,
        include: str | None = None,
    ) -> list[Json]:
        query = self.builder.select(filters, params)
        if include is None:
            return await self.execute(query)
        async with self.transaction() as transaction:
            result = await transaction.execute(query)
            await transaction.get_related(result, include)
        return result

    async def count(self, filters: list[Filter]) -> int:
        return (await self.execute(self.builder.count(filters)))[0]["count"]

    async def exists(self, filters: list[Filter]) -> bool:
        return len(await self.execute(self.builder.exists(filters))) > 0

    async def lock(self) -> None:
        """Lock the table until the end of the current transaction.

        In REPEATABLE READ this must come before any other statement in the
        transaction: LOCK TABLE does not take the transaction snapshot.
        """
        if not self.nested:
            raise RuntimeError("lock() outside of a transaction has no effect")
        await self.execute(self.builder.lock())

    async def _get_related_one_to_many(
        self,
        items: list[Json],
        field_name: str,
        fk_name: str,
    ) -> None:
        """Fetch related objects for `items` and add them inplace.

        The result is `items` having an additional field containing a list of related
        objects which were retrieved from self in 1 SELECT query.

        Args:
            items: The items for which to fetch related objects. Changed inplace.
            field_name: The key in item to put the fetched related objects into.
            fk_name: The column name on the related object that refers to item["id"]

        Example:
            Author has a one-to-many relation to books.

            >>> authors = [{"id": 2, "first_name": "James"}]
            >>> await BookSQLGateway()._get_related_one_to_many(
                items=authors,
                field_name="books",
                fk_name="author_id",
            )
            >>> authors[0]
            {
                "id": 2,
                "first_name": "James",
                "books": [{"id": 1, "title": "C#", "author_id": 2}]
            }
        """
        for x in items:
            x[field_name] = []
        if not items:
            return
        item_lut = {x["id"]: x for x in items}
        related_objs = await self.filter(
            [Filter(field=fk_name, values=list(item_lut.keys()))]
        )
        for related_obj in related_objs:
            item_lut[related_obj[fk_name]][field_name].append(related_obj)

    async def _get_related_many_to_one(
        self,
        items: list[Json],
        field_name: str,
        fk_name: str,
    ) -> None:
        """Fetch the objects referred to by `items` and add them inplace.

        The counterpart of `_get_related_one_to_many`: every item gets the object
        (from self) its `fk_name` points to, or None. All are retrieved in 1 SELECT
        query.

        Example:
            Book has a many-to-one relation to authors.

            >>> books = [{"id": 1, "title": "C#", "author_id": 2}]
            >>> await AuthorSQLGateway()._get_related_many_to_one(
                items=books,
                field_name="author",
                fk_name="author_id",
            )
            >>> books[0]["author"]
            {"id": 2, "first_name": "James", "last_name": "Bond", "email": None}
        """
        for x in items:
            x[field_name] = None
        ids = sorted({x[fk_name] for x in items if x.get(fk_name) is not None})
        if not ids:
            return
        related_lut = {
            x["id"]: x for x in await self.filter([Filter(field="id", values=ids)])
        }
        for x in items:
            x[field_name] = related_lut.get(x[fk_name])
