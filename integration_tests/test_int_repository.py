import asyncio
from unittest import mock

import pytest
from sqlalchemy.exc import IntegrityError

from bookshelf import AlreadyExists
from bookshelf import ComparisonFilter
from bookshelf import DoesNotExist
from bookshelf import Filter
from bookshelf.books import Author
from bookshelf.books import AuthorRepository
from bookshelf.books import AuthorSQLGateway
from bookshelf.books import Book
from bookshelf.books import BookRepository
from bookshelf.books import BookSQLGateway
from bookshelf.books import ManageBook


@pytest.fixture
def author_repo(empty_database):
    return AuthorRepository(AuthorSQLGateway(empty_database))


@pytest.fixture
def book_repo(empty_database):
    return BookRepository(BookSQLGateway(empty_database))


@pytest.fixture
async def author_id(author_repo):
    return await author_repo.add(
        Author(first_name="James", last_name="Bond", email="james@mi6.gov.uk")
    )


async def test_add_then_get(author_repo):
    author = Author(first_name="Jane", last_name="Doe")

    id_ = await author_repo.add(author)

    assert await author_repo.get(id_) == author.update(id=id_)


async def test_get_does_not_exist(author_repo):
    assert await author_repo.get(42) is None


async def test_remove_does_not_exist(author_repo, author_id):
    assert await author_repo.remove(42) is False
    assert len(await author_repo.all()) == 1


async def test_remove(author_repo, author_id):
    assert await author_repo.remove(author_id) is True
    assert await author_repo.get(author_id) is None


async def test_remove_cascades(author_repo, book_repo, author_id):
    await book_repo.add(Book(title="C#", author_id=author_id))

    await author_repo.remove(author_id)

    assert await book_repo.all() == []


async def test_add_many(book_repo, author_id):
    ids = await book_repo.add_many(
        [Book(title="C#", author_id=author_id), Book(title="F#", author_id=author_id)]
    )

    assert len(ids) == 2
    assert (await book_repo.get(ids[0])).title == "C#"
    assert (await book_repo.get(ids[1])).title == "F#"


async def test_add_many_atomic(book_repo, author_id):
    with pytest.raises(IntegrityError):
        await book_repo.add_many(
            [Book(title="C#", author_id=author_id), Book(title="F#", author_id=42)]
        )

    assert await book_repo.all() == []


async def test_add_many_cancelled(book_repo, author_id):
    add = BookSQLGateway.add
    added = []

    async def add_then_cancel(self, item):
        added.append(item)
        if len(added) == 2:
            asyncio.current_task().cancel()
            await asyncio.sleep(0)
        return await add(self, item)

    with mock.patch.object(BookSQLGateway, "add", add_then_cancel):
        task = asyncio.create_task(
            book_repo.add_many(
                [Book(title=x, author_id=author_id) for x in ["C#", "F#", "Go"]]
            )
        )
        with pytest.raises(asyncio.CancelledError):
            await task

    assert len(added) == 2
    assert await book_repo.all() == []


async def test_update(author_repo, author_id):
    author = await author_repo.get(author_id)

    await author_repo.update(author.update(first_name="Jim"))

    assert (await author_repo.get(author_id)).first_name == "Jim"


async def test_update_does_not_exist(author_repo):
    with pytest.raises(DoesNotExist):
        await author_repo.update(Author(id=42, first_name="Jim", last_name="Bond"))


async def test_add_existing_id(empty_database, author_id):
    with pytest.raises(AlreadyExists):
        await AuthorSQLGateway(empty_database).add(
            {"id": author_id, "first_name": "Jim", "last_name": "Bond"}
        )


async def test_count_exists(book_repo, author_id):
    await book_repo.add(Book(title="C#", author_id=author_id))

    assert await book_repo.count([]) == 1
    assert await book_repo.exists([Filter(field="title", values=["C#"])])
    assert not await book_repo.exists([Filter(field="title", values=["Go"])])


@pytest.fixture
async def books(book_repo, author_id):
    await book_repo.add_many(
        [Book(title=x, author_id=author_id) for x in ["Go", "C#", "Zig"]]
    )


async def test_query_all(book_repo, books):
    query = book_repo.query().order_by("id")

    assert [x.title for x in await query.all()] == ["Go", "C#", "Zig"]


async def test_query_compose(book_repo, books):
    query = (
        book_repo.query()
        .where(ComparisonFilter(field="title", values=["D"], operator="gt"))
        .order_by("title", ascending=False)
    )

    assert [x.title for x in await query.all()] == ["Zig", "Go"]
    assert await query.count() == 2
    assert (await query.slice(1, offset=1).first()).title == "Go"


async def test_query_include_author(book_repo, books, author_id):
    result = await book_repo.query("author").all()

    assert len(result) == 3
    for book in result:
        assert book.author.id == author_id
        assert book.author.email == "james@mi6.gov.uk"


async def test_query_include_books(author_repo, books):
    (author,) = await author_repo.query("books").all()

    assert sorted(x.title for x in author.books) == ["C#", "Go", "Zig"]


async def test_manage_book_get_books(empty_database, books):
    result = await ManageBook(BookRepository(BookSQLGateway(empty_database))).get_books()

    assert sorted(x.title for x in result) == ["C#", "Go", "Zig"]
    assert all(x.author is None for x in result)
