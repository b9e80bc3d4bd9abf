from sqlalchemy import Column
from sqlalchemy import ForeignKey
from sqlalchemy import Integer
from sqlalchemy import MetaData
from sqlalchemy import String
from sqlalchemy import Table

__all__ = ["metadata", "author_table", "book_table"]

metadata = MetaData()

author_table = Table(
    "authors",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("first_name", String(50), nullable=False),
    Column("last_name", String(50), nullable=False),
    Column("email", String(50), nullable=True),
)


book_table = Table(
    "books",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(50), nullable=False),
    Column(
        "author_id",
        Integer,
        ForeignKey("authors.id", ondelete="CASCADE", name="books_author_id_fkey"),
        nullable=False,
        index=True,
    ),
)
