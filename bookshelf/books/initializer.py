# (c) Nelen & Schuurmans

import logging
from enum import Enum
from functools import partial
from pathlib import Path

import backoff
from sqlalchemy.exc import InterfaceError
from sqlalchemy.exc import OperationalError

from bookshelf.base.domain import AlreadyExists
from bookshelf.sql import SQLDatabase
from bookshelf.sql import migrations

from .domain import Author
from .domain import AuthorRepository
from .domain import Book
from .domain import BookRepository
from .sql_gateway import AuthorSQLGateway
from .sql_gateway import BookSQLGateway

__all__ = ["InitState", "DatabaseInitializer", "MIGRATIONS_DIR"]

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"

TRANSIENT_ERRORS = (OSError, OperationalError, InterfaceError)


def _log_retry(details) -> None:
    logger.warning(
        "Database not reachable (attempt %d, %.1fs elapsed), retrying",
        details["tries"],
        details["elapsed"],
    )


class InitState(str, Enum):
    UNINITIALIZED = "uninitialized"
    SCHEMA_READY = "schema_ready"
    SEEDED = "seeded"


class DatabaseInitializer:
    """Bring a database to the current schema and seed it.

    The steps are: ensure the database exists, migrate it, seed it. Each is
    idempotent and may be called on its own; ``initialize`` runs the ones the
    current state still needs. Failures propagate: the caller must not start
    serving when ``initialize`` raises.
    """

    def __init__(
        self,
        database: SQLDatabase,
        root: SQLDatabase,
        database_name: str,
        seed: bool = True,
        migrations_dir: Path = MIGRATIONS_DIR,
    ):
        self.database = database
        self.root = root
        self.database_name = database_name
        self.seed_enabled = seed
        self.migrations_dir = migrations_dir
        self.state = InitState.UNINITIALIZED

    @backoff.on_exception(
        backoff.expo, TRANSIENT_ERRORS, max_tries=5, max_value=8, on_backoff=_log_retry
    )
    async def ensure_database(self) -> None:
        if await self.root.database_exists(self.database_name):
            logger.info("Database '%s' exists", self.database_name)
            return
        logger.info("Creating database '%s'", self.database_name)
        try:
            await self.root.create_database(self.database_name)
        except AlreadyExists:
            logger.info("Database '%s' was created concurrently", self.database_name)

    async def migrate(self) -> None:
        logger.info("Applying migrations")
        await self.database.run_sync(
            partial(migrations.upgrade, script_location=self.migrations_dir)
        )
        logger.info("Migrations applied")
        self.state = InitState.SCHEMA_READY

    async def seed(self) -> None:
        """Insert one author with one book if there are no books at all."""
        if self.state is InitState.UNINITIALIZED:
            raise RuntimeError("Cannot seed a database that has not been migrated")
        async with self.database.transaction() as transaction:
            books = BookSQLGateway(transaction, nested=True)
            # serializes concurrent seeders; must precede the existence check
            await books.lock()
            if await books.exists([]):
                logger.info("Database already contains books, not seeding")
            else:
                author_id = await AuthorRepository(
                    AuthorSQLGateway(transaction, nested=True)
                ).add(Author(first_name="James", last_name="Bond"))
                await BookRepository(books).add(Book(title="C#", author_id=author_id))
                logger.info("Database seeded")
        self.state = InitState.SEEDED

    async def initialize(self) -> InitState:
        if self.state is InitState.UNINITIALIZED:
            logger.info("Initializing database '%s'", self.database_name)
            await self.ensure_database()
            await self.migrate()
        if self.state is InitState.SCHEMA_READY and self.seed_enabled:
            await self.seed()
        return self.state
