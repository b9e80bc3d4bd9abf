from unittest import mock

import pytest

from bookshelf import Filter
from bookshelf import InMemoryGateway
from bookshelf.books import Author
from bookshelf.books import AuthorRepository
from bookshelf.books import Book
from bookshelf.books import BookModel
from bookshelf.books import BookRepository
from bookshelf.books import ManageAuthor
from bookshelf.books import ManageBook


@pytest.fixture
def manage_book():
    return ManageBook(
        BookRepository(
            InMemoryGateway(
                [
                    {"id": 1, "title": "C#", "author_id": 1},
                    {"id": 2, "title": "F#", "author_id": 1},
                ]
            )
        )
    )


def test_entity_attr():
    assert ManageBook.entity is Book
    assert ManageAuthor.entity is Author


async def test_get_books(manage_book):
    assert await manage_book.get_books() == [
        BookModel(id=1, title="C#", author=None),
        BookModel(id=2, title="F#", author=None),
    ]


async def test_get_books_empty():
    manage_book = ManageBook(BookRepository(InMemoryGateway([])))
    assert await manage_book.get_books() == []


async def test_query_books(manage_book):
    query = manage_book.query_books().where(Filter(field="title", values=["F#"]))
    assert await query.all() == [Book(id=2, title="F#", author_id=1)]


async def test_query_books_include():
    repo = mock.Mock()
    result = ManageBook(repo).query_books("author")

    repo.query.assert_called_once_with("author")
    assert result is repo.query.return_value


async def test_create_book(manage_book):
    book = await manage_book.create({"title": "Go", "author_id": 1})

    assert book == Book(id=3, title="Go", author_id=1)


async def test_create_author():
    manage_author = ManageAuthor(AuthorRepository(InMemoryGateway([])))

    author = await manage_author.create({"first_name": "James", "last_name": "Bond"})

    assert author.id == 1
    assert await manage_author.retrieve(1) == author
