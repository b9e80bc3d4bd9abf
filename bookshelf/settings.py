# (c) Nelen & Schuurmans

import os
from collections.abc import Mapping

from bookshelf.base.domain import ValueObject

__all__ = ["BookshelfSettings"]


ENV_PREFIX = "BOOKSHELF_"


class BookshelfSettings(ValueObject):
    # user:password@host:port, without scheme and database
    postgres_url: str = "postgres:postgres@localhost:5432"
    database_name: str = "bookshelf"
    maintenance_database: str = "postgres"
    pool_size: int = 5
    seed: bool = True

    @property
    def database_url(self) -> str:
        return f"{self.postgres_url}/{self.database_name}"

    @property
    def maintenance_url(self) -> str:
        return f"{self.postgres_url}/{self.maintenance_database}"

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] | None = None
    ) -> "BookshelfSettings":
        """Read BOOKSHELF_<FIELD> variables, e.g. BOOKSHELF_DATABASE_NAME."""
        if environ is None:
            environ = os.environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        return cls.create(**values)
