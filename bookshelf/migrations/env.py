from alembic import context

from bookshelf.books.sql_model import metadata

# this is the Alembic Config object; the connection to migrate is passed in
# through its attributes by bookshelf.sql.migrations
config = context.config

target_metadata = metadata


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is None:
        raise RuntimeError(
            "No connection to migrate, use bookshelf.sql.migrations.upgrade"
        )
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    raise RuntimeError("Offline migrations are not supported")
else:
    run_migrations_online()
