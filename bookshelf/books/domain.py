# (c) Nelen & Schuurmans

from typing import ClassVar

from pydantic import Field

from bookshelf.base.domain import Entity
from bookshelf.base.domain import Repository

__all__ = ["Author", "Book", "AuthorRepository", "BookRepository"]


class Author(Entity):
    relations: ClassVar[frozenset[str]] = frozenset({"books"})

    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str | None = Field(default=None, max_length=50)
    books: list["Book"] = []


class Book(Entity):
    relations: ClassVar[frozenset[str]] = frozenset({"author"})

    title: str = Field(max_length=50)
    author_id: int
    author: Author | None = None


Author.model_rebuild()


class AuthorRepository(Repository[Author]):
    pass


class BookRepository(Repository[Book]):
    pass
