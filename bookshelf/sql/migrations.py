"""Run Alembic migrations on a connection handed out by a SQLDatabase.

Alembic is synchronous; use these through ``SQLDatabase.run_sync``.
"""
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Connection

__all__ = ["make_config", "upgrade", "current_revision", "head_revision"]


def make_config(script_location: str | Path, connection: Connection | None = None):
    config = Config()
    config.set_main_option("script_location", str(script_location))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def upgrade(
    connection: Connection, script_location: str | Path, revision: str = "head"
) -> None:
    command.upgrade(make_config(script_location, connection), revision)


def current_revision(connection: Connection) -> str | None:
    return MigrationContext.configure(connection).get_current_revision()


def head_revision(script_location: str | Path) -> str | None:
    return ScriptDirectory.from_config(make_config(script_location)).get_current_head()
