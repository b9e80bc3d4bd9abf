"""Translation of entities to the models exposed by the API.

Mappings never fetch anything: a relation that was not loaded by the query
simply stays empty in the model.
"""
from .domain import Author
from .domain import Book
from .models import AuthorModel
from .models import BookModel

__all__ = ["author_to_model", "book_to_model"]


def author_to_model(author: Author) -> AuthorModel:
    return AuthorModel(
        id=author.id,
        first_name=author.first_name,
        last_name=author.last_name,
        email=author.email,
    )


def book_to_model(book: Book) -> BookModel:
    return BookModel(
        id=book.id,
        title=book.title,
        author=None if book.author is None else author_to_model(book.author),
    )
