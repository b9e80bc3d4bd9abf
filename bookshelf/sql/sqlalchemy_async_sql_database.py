# (c) Nelen & Schuurmans

import re
from collections.abc import AsyncIterator
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.sql import Executable

from bookshelf.base.domain import AlreadyExists
from bookshelf.base.domain import Conflict
from bookshelf.base.domain import Json

from .sql_provider import SQLDatabase
from .sql_provider import SQLProvider

__all__ = ["SQLAlchemyAsyncSQLDatabase"]


UNIQUE_VIOLATION_DETAIL_REGEX = re.compile(
    r"DETAIL:\s*Key\s\((?P<key>.*)\)=\((?P<value>.*)\)\s+already exists"
)
DUPLICATE_DATABASE_REGEX = re.compile(r'database "(?P<value>.*)" already exists')


def maybe_raise_conflict(e: DBAPIError) -> None:
    # https://www.postgresql.org/docs/current/errcodes-appendix.html
    if getattr(e.orig, "pgcode", None) == "40001":  # serialization_failure
        raise Conflict("could not execute query due to concurrent update")


def maybe_raise_already_exists(e: DBAPIError) -> None:
    # https://www.postgresql.org/docs/current/errcodes-appendix.html
    pgcode = getattr(e.orig, "pgcode", None)
    if pgcode == "42P04":  # duplicate_database
        match = DUPLICATE_DATABASE_REGEX.search(str(e.orig))
        raise AlreadyExists(key="database", value=match["value"] if match else None)
    if pgcode == "23505":  # unique_violation
        lines = str(e.orig.args[0]).split("\n")
        if len(lines) <= 1:
            raise AlreadyExists()
        match = UNIQUE_VIOLATION_DETAIL_REGEX.match(lines[1])
        if match:
            raise AlreadyExists(key=match["key"], value=match["value"])
        else:
            raise AlreadyExists()


def translate_errors(e: DBAPIError) -> None:
    maybe_raise_conflict(e)
    maybe_raise_already_exists(e)


class SQLAlchemyAsyncSQLDatabase(SQLDatabase):
    engine: AsyncEngine

    def __init__(self, url: str, **kwargs):
        kwargs.setdefault("isolation_level", "REPEATABLE READ")
        self.engine = create_async_engine(f"postgresql+asyncpg://{url}", **kwargs)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def execute(
        self, query: Executable, bind_params: dict[str, Any] | None = None
    ) -> list[Json]:
        async with self.transaction() as transaction:
            return await transaction.execute(query, bind_params)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SQLProvider]:  # type: ignore
        async with self.engine.connect() as connection:
            async with connection.begin():
                yield SQLAlchemyAsyncSQLTransaction(connection)

    async def execute_autocommit(self, query: Executable) -> list[Json]:
        engine = create_async_engine(self.engine.url, isolation_level="AUTOCOMMIT")
        try:
            async with engine.connect() as connection:
                return await SQLAlchemyAsyncSQLTransaction(connection).execute(query)
        finally:
            await engine.dispose()

    async def run_sync(self, func: Callable[[Connection], Any]) -> Any:
        async with self.engine.begin() as connection:
            return await connection.run_sync(func)


class SQLAlchemyAsyncSQLTransaction(SQLProvider):
    def __init__(self, connection: AsyncConnection):
        self.connection = connection

    async def execute(
        self, query: Executable, bind_params: dict[str, Any] | None = None
    ) -> list[Json]:
        try:
            result = await self.connection.execute(query, bind_params)
        except DBAPIError as e:
            translate_errors(e)
            raise e
        if not result.returns_rows:
            return []
        # _asdict() is a documented method of a NamedTuple
        # https://docs.python.org/3/library/collections.html#collections.somenamedtuple._asdict
        return [x._asdict() for x in result.fetchall()]

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SQLProvider]:  # type: ignore
        async with self.connection.begin_nested():
            yield self
