from pydantic import ValidationError

from bookshelf import AlreadyExists
from bookshelf import BadRequest
from bookshelf import DoesNotExist
from bookshelf import ValueObject


def test_bad_request_short_str():
    e = BadRequest("bla bla bla")
    assert str(e) == "validation error: bla bla bla"


def test_bad_request_errors_from_msg():
    e = BadRequest("bla")
    assert e.errors() == [
        {"type": "value_error", "msg": "bla", "loc": [], "input": None}
    ]


def test_does_not_exist_str():
    e = DoesNotExist("book", id=12)
    assert str(e) == "does not exist: book with id=12"


def test_does_not_exist_no_id_str():
    e = DoesNotExist("book")
    assert str(e) == "does not exist: book"


def test_does_not_exist_zero_id_str():
    e = DoesNotExist("book", id=0)
    assert str(e) == "does not exist: book with id=0"


def test_already_exists():
    e = AlreadyExists(3)
    assert str(e) == "record with id=3 already exists"
    assert e.key == "id"
    assert e.value == 3


def test_already_exists_key():
    e = AlreadyExists("bookshelf", key="database")
    assert str(e) == "record with database=bookshelf already exists"


class Book(ValueObject):
    title: str


def test_bad_request_from_validation_error():
    try:
        Book()
    except ValidationError as e:
        err = BadRequest(e)

    assert str(err) == "validation error: 'title' Field required"
