# (c) Nelen & Schuurmans

from collections.abc import AsyncIterator
from collections.abc import Callable
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.sql import Executable

from bookshelf.base.domain import Json

__all__ = ["SQLProvider", "SQLDatabase"]


class SQLProvider:
    async def execute(
        self, query: Executable, bind_params: dict[str, Any] | None = None
    ) -> list[Json]:
        raise NotImplementedError()

    async def transaction(self) -> AsyncIterator["SQLProvider"]:
        raise NotImplementedError()
        yield


class SQLDatabase(SQLProvider):
    async def execute_autocommit(self, query: Executable) -> list[Json]:
        raise NotImplementedError()

    async def run_sync(self, func: Callable[[Connection], Any]) -> Any:
        """Run a blocking callable on a connection within one transaction."""
        raise NotImplementedError()

    async def dispose(self) -> None:
        pass

    async def database_exists(self, name: str) -> bool:
        query = text("SELECT 1 FROM pg_database WHERE datname = :name").bindparams(
            name=name
        )
        return len(await self.execute(query)) > 0

    async def create_database(self, name: str) -> None:
        await self.execute_autocommit(text(f'CREATE DATABASE "{name}"'))

    async def drop_database(self, name: str) -> None:
        await self.execute_autocommit(text(f'DROP DATABASE IF EXISTS "{name}"'))
