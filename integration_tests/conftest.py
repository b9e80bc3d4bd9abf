# (c) Nelen & Schuurmans

import os

import pytest

from bookshelf.books import DatabaseInitializer
from bookshelf.sql import SQLAlchemyAsyncSQLDatabase

DATABASE_NAME = "bookshelf_test"


@pytest.fixture(scope="session")
def postgres_url():
    return os.environ.get("POSTGRES_URL", "postgres:postgres@localhost:5432")


@pytest.fixture(scope="session")
def database_name():
    return DATABASE_NAME


@pytest.fixture
async def root(postgres_url):
    root = SQLAlchemyAsyncSQLDatabase(f"{postgres_url}/postgres")
    yield root
    await root.dispose()


@pytest.fixture
async def database(root, postgres_url):
    """A connection pool to a database that does not exist yet."""
    await root.drop_database(DATABASE_NAME)
    database = SQLAlchemyAsyncSQLDatabase(f"{postgres_url}/{DATABASE_NAME}")
    yield database
    await database.dispose()


@pytest.fixture
def make_initializer(database, root):
    def make(seed: bool = True) -> DatabaseInitializer:
        return DatabaseInitializer(database, root, DATABASE_NAME, seed=seed)

    return make


@pytest.fixture
async def empty_database(database, make_initializer):
    await make_initializer(seed=False).initialize()
    return database
