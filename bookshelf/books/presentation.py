from http import HTTPStatus
from typing import Annotated
from typing import Literal

from fastapi import Query
from fastapi import Response
from pydantic import Field

from bookshelf.base.domain import DoesNotExist
from bookshelf.base.domain import ValueObject
from bookshelf.fastapi import delete
from bookshelf.fastapi import get
from bookshelf.fastapi import post
from bookshelf.fastapi import put
from bookshelf.fastapi import RequestQuery
from bookshelf.fastapi import Resource
from bookshelf.fastapi import v

from .application import ManageAuthor
from .application import ManageBook
from .mappings import author_to_model
from .mappings import book_to_model
from .models import AuthorModel
from .models import BookModel

__all__ = ["V1Books", "V1Authors"]


class BookWrite(ValueObject):
    title: str = Field(max_length=50)
    author_id: int


class AuthorWrite(ValueObject):
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str | None = Field(default=None, max_length=50)


class BookSearchQuery(RequestQuery):
    NON_FILTERS = RequestQuery.NON_FILTERS | {"include"}

    order_by: Literal["id", "-id", "title", "-title"] = Query(
        default="id", description="Field to order by"
    )
    title: str | None = None
    author_id: int | None = None
    id__gt: int | None = None
    include: Literal["author"] | None = Query(
        default=None, description="Relation to resolve"
    )


class V1Books(Resource, version=v(1), name="books"):
    """Books and their authors"""

    def __init__(self):
        self.manager = ManageBook()

    @get("/books", response_model=list[BookModel])
    async def list_books(self):
        return await self.manager.get_books()

    @get("/books/search", response_model=list[BookModel])
    async def find_books(self, q: Annotated[BookSearchQuery, Query()]):
        params = q.as_query_options()
        query = (
            self.manager.query_books(q.include)
            .where(*q.filters())
            .order_by(params.order_by, params.ascending)
            .slice(params.limit, params.offset)
        )
        return [book_to_model(x) for x in await query.all()]

    @get("/books/{id}", response_model=BookModel)
    async def retrieve_book(self, id: int):
        return book_to_model(await self.manager.retrieve(id))

    @post("/books", status_code=HTTPStatus.CREATED, response_model=BookModel)
    async def create_book(self, obj: BookWrite):
        return book_to_model(await self.manager.create(obj.model_dump()))

    @put("/books/{id}", response_model=BookModel)
    async def update_book(self, id: int, obj: BookWrite):
        return book_to_model(await self.manager.update(id, obj.model_dump()))

    @delete("/books/{id}", status_code=HTTPStatus.NO_CONTENT, response_class=Response)
    async def destroy_book(self, id: int):
        if not await self.manager.destroy(id):
            raise DoesNotExist("book", id)


class V1Authors(Resource, version=v(1), name="authors"):
    """Authors"""

    def __init__(self):
        self.manager = ManageAuthor()

    @get("/authors/{id}", response_model=AuthorModel)
    async def retrieve_author(self, id: int):
        return author_to_model(await self.manager.retrieve(id))

    @post("/authors", status_code=HTTPStatus.CREATED, response_model=AuthorModel)
    async def create_author(self, obj: AuthorWrite):
        return author_to_model(await self.manager.create(obj.model_dump()))
