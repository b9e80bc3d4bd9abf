# (c) Nelen & Schuurmans

from pydantic import Field

from bookshelf.base.domain import ValueObject

from .domain import Book

__all__ = ["AuthorModel", "BookModel"]


class AuthorModel(ValueObject):
    id: int
    first_name: str
    last_name: str
    email: str | None = None
    # never filled by the mappings; excluded to avoid serializing the cycle
    books: list[Book] = Field(default=[], exclude=True)


class BookModel(ValueObject):
    id: int
    title: str
    author: AuthorModel | None = None
