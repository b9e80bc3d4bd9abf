# (c) Nelen & Schuurmans

from bookshelf.base.application import Manage
from bookshelf.base.domain import Query

from .domain import Author
from .domain import AuthorRepository
from .domain import Book
from .domain import BookRepository
from .mappings import book_to_model
from .models import BookModel
from .sql_gateway import AuthorSQLGateway
from .sql_gateway import BookSQLGateway

__all__ = ["ManageBook", "ManageAuthor"]


class ManageBook(Manage[Book]):
    def __init__(self, repo: BookRepository | None = None):
        if repo is None:
            repo = BookRepository(BookSQLGateway())
        self.repo = repo

    async def get_books(self) -> list[BookModel]:
        return [book_to_model(x) for x in await self.repo.all()]

    def query_books(self, include: str | None = None) -> Query[Book]:
        return self.repo.query(include)


class ManageAuthor(Manage[Author]):
    def __init__(self, repo: AuthorRepository | None = None):
        if repo is None:
            repo = AuthorRepository(AuthorSQLGateway())
        self.repo = repo
