import json
import logging
from http import HTTPStatus

from pydantic import BaseModel
from pydantic import ValidationError

from bookshelf import AlreadyExists
from bookshelf import BadRequest
from bookshelf import Conflict
from bookshelf import DoesNotExist
from bookshelf.fastapi.error_responses import already_exists_handler
from bookshelf.fastapi.error_responses import conflict_handler
from bookshelf.fastapi.error_responses import internal_error_handler
from bookshelf.fastapi.error_responses import not_found_handler
from bookshelf.fastapi.error_responses import validation_error_handler


async def test_does_not_exist():
    actual = await not_found_handler(None, DoesNotExist("book", id=15))

    assert actual.status_code == HTTPStatus.NOT_FOUND
    assert json.loads(actual.body) == {"message": "Could not find book with id=15"}


async def test_does_not_exist_no_id():
    actual = await not_found_handler(None, DoesNotExist("book"))

    assert actual.status_code == HTTPStatus.NOT_FOUND
    assert json.loads(actual.body) == {"message": "Could not find book"}


async def test_does_not_exist_zero_id():
    actual = await not_found_handler(None, DoesNotExist("book", id=0))

    assert json.loads(actual.body) == {"message": "Could not find book with id=0"}


async def test_conflict():
    actual = await conflict_handler(None, Conflict("foo"))

    assert actual.status_code == HTTPStatus.CONFLICT
    assert json.loads(actual.body) == {"message": "Conflict", "detail": "foo"}


async def test_conflict_no_msg():
    actual = await conflict_handler(None, Conflict())

    assert actual.status_code == HTTPStatus.CONFLICT
    assert json.loads(actual.body) == {"message": "Conflict", "detail": None}


async def test_already_exists():
    actual = await already_exists_handler(None, AlreadyExists(3))

    assert actual.status_code == HTTPStatus.CONFLICT
    assert json.loads(actual.body) == {
        "message": "Already exists",
        "detail": "record with id=3 already exists",
    }


async def test_internal_error(caplog):
    actual = await internal_error_handler(None, ValueError("secret"))

    assert actual.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert json.loads(actual.body) == {
        "message": "Internal server error",
        "detail": None,
    }
    (record,) = caplog.records
    assert record.levelno == logging.ERROR
    assert record.exc_info is not None


class Book(BaseModel):
    title: str


async def test_validation_error():
    try:
        Book(name="foo")
    except ValidationError as e:
        actual = await validation_error_handler(None, e)

    assert actual.status_code == HTTPStatus.BAD_REQUEST
    assert json.loads(actual.body) == {
        "message": "Validation error",
        "detail": [{"loc": ["title"], "msg": "Field required", "type": "missing"}],
    }


async def test_bad_request_from_validation_error():
    try:
        Book(name="foo")
    except ValidationError as e:
        actual = await validation_error_handler(None, BadRequest(e))

    assert actual.status_code == HTTPStatus.BAD_REQUEST
    assert json.loads(actual.body) == {
        "message": "Validation error",
        "detail": [{"loc": ["title"], "msg": "Field required", "type": "missing"}],
    }


async def test_bad_request_from_msg():
    actual = await validation_error_handler(None, BadRequest("foo"))

    assert actual.status_code == HTTPStatus.BAD_REQUEST
    assert json.loads(actual.body) == {
        "message": "Validation error",
        "detail": [{"loc": [], "msg": "foo", "type": "value_error"}],
    }
