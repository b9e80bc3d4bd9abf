# (c) Nelen & Schuurmans

from bookshelf.base.domain import Json
from bookshelf.sql import SQLGateway

from .sql_model import author_table
from .sql_model import book_table

__all__ = ["AuthorSQLGateway", "BookSQLGateway"]


class AuthorSQLGateway(SQLGateway, table=author_table):
    async def get_related(self, items: list[Json], include: str) -> None:
        if include != "books":
            return await super().get_related(items, include)
        await BookSQLGateway(self.provider, nested=True)._get_related_one_to_many(
            items, field_name="books", fk_name="author_id"
        )


class BookSQLGateway(SQLGateway, table=book_table):
    async def get_related(self, items: list[Json], include: str) -> None:
        if include != "author":
            return await super().get_related(items, include)
        await AuthorSQLGateway(self.provider, nested=True)._get_related_many_to_one(
            items, field_name="author", fk_name="author_id"
        )
