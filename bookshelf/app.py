# (c) Nelen & Schuurmans

import inject

from bookshelf.books import DatabaseInitializer
from bookshelf.books.presentation import V1Authors
from bookshelf.books.presentation import V1Books
from bookshelf.fastapi import Service
from bookshelf.settings import BookshelfSettings
from bookshelf.sql import SQLAlchemyAsyncSQLDatabase
from bookshelf.sql import SQLDatabase

__all__ = ["create_app", "create_initializer"]


def create_initializer(
    settings: BookshelfSettings,
) -> tuple[DatabaseInitializer, SQLDatabase, SQLDatabase]:
    database = SQLAlchemyAsyncSQLDatabase(
        settings.database_url, pool_size=settings.pool_size
    )
    root = SQLAlchemyAsyncSQLDatabase(settings.maintenance_url, pool_size=1)
    initializer = DatabaseInitializer(
        database, root, settings.database_name, seed=settings.seed
    )
    return initializer, database, root


def create_app(settings: BookshelfSettings | None = None):
    """Application factory, e.g. ``uvicorn --factory bookshelf.app:create_app``"""
    if settings is None:
        settings = BookshelfSettings.from_environ()
    initializer, database, root = create_initializer(settings)
    inject.configure(lambda binder: binder.bind(SQLDatabase, database), clear=True)
    return Service(V1Books(), V1Authors()).create_app(
        title="Bookshelf",
        description="Books and their authors",
        on_startup=[initializer.initialize],
        on_shutdown=[database.dispose, root.dispose],
    )
