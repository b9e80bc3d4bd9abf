"""Create, migrate and seed the bookshelf database."""
import argparse
import asyncio
import logging

from bookshelf.app import create_initializer
from bookshelf.settings import BookshelfSettings

logger = logging.getLogger(__name__)


def get_parser():
    """Return argument parser."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        default=False,
        help="Verbose output",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        dest="no_seed",
        default=False,
        help="Do not insert the example author and book",
    )
    return parser


async def init_db(settings: BookshelfSettings) -> None:
    initializer, database, root = create_initializer(settings)
    try:
        state = await initializer.initialize()
    finally:
        await database.dispose()
        await root.dispose()
    logger.info("Database '%s' is %s", settings.database_name, state.value)


def main(argv=None):
    """Initialize the database configured by the BOOKSHELF_* environment variables.

    This is the 'bookshelf-init-db' entrypoint configured in pyproject.toml.
    """
    options = get_parser().parse_args(argv)
    if options.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    try:
        settings = BookshelfSettings.from_environ()
        if options.no_seed:
            settings = settings.update(seed=False)
        asyncio.run(init_db(settings))
    except Exception:
        logger.exception("Database initialization failed")
        return 1
    return 0
