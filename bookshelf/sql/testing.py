from collections.abc import AsyncIterator
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any
from unittest import mock

from sqlalchemy.dialects import postgresql
from sqlalchemy.sql import Executable

from bookshelf.base.domain import Json

from .sql_provider import SQLDatabase
from .sql_provider import SQLProvider

__all__ = ["FakeSQLDatabase", "assert_query_equal"]


class FakeSQLDatabase(SQLDatabase):
    """Records queries instead of executing them.

    Every top-level call (``execute``, ``execute_autocommit``, ``transaction``)
    appends one list of queries to ``queries``. All calls return what the
    ``result`` mock returns.
    """

    def __init__(self):
        self.queries: list[list[Executable]] = []
        self.result = mock.Mock(return_value=[])
        self.sync_calls: list[Callable] = []

    async def execute(
        self, query: Executable, _: dict[str, Any] | None = None
    ) -> list[Json]:
        self.queries.append([query])
        return self.result()

    async def execute_autocommit(self, query: Executable) -> list[Json]:
        self.queries.append([query])
        return self.result()

    async def run_sync(self, func: Callable) -> Any:
        self.sync_calls.append(func)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["SQLProvider"]:  # type: ignore
        x = FakeSQLTransaction(result=self.result)
        self.queries.append(x.queries)
        yield x


class FakeSQLTransaction(SQLProvider):
    def __init__(self, result: mock.Mock):
        self.queries: list[Executable] = []
        self.result = result

    async def execute(
        self, query: Executable, _: dict[str, Any] | None = None
    ) -> list[Json]:
        self.queries.append(query)
        return self.result()


def assert_query_equal(q: Executable, expected: str, literal_binds: bool = True):
    """There are two ways of 'binding' parameters (for testing!):

    literal_binds=True: use the built-in sqlalchemy way, which fails on some datatypes
    literal_binds=False: do it yourself using %, there is no 'mogrify' so don't expect quotes.
    """
    assert isinstance(q, Executable)
    compiled = q.compile(
        compile_kwargs={"literal_binds": literal_binds},
        dialect=postgresql.dialect(),
    )
    if not literal_binds:
        actual = str(compiled) % compiled.params
    else:
        actual = str(compiled)
    actual = actual.replace("\n", "").replace("  ", " ")
    assert actual == expected
