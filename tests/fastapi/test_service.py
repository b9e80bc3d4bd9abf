from http import HTTPStatus
from unittest import mock

import pytest
from fastapi.testclient import TestClient

from bookshelf import AlreadyExists
from bookshelf import BadRequest
from bookshelf import Conflict
from bookshelf import DoesNotExist
from bookshelf.fastapi import get
from bookshelf.fastapi import Resource
from bookshelf.fastapi import Service
from bookshelf.fastapi import v


class V1Foo(Resource, version=v(1), name="foo"):
    @get("/foo")
    async def foo(self):
        return {"foo": "bar"}

    @get("/raises/{kind}")
    async def raises(self, kind: str):
        raise {
            "does-not-exist": DoesNotExist("foo", 2),
            "conflict": Conflict("foo"),
            "already-exists": AlreadyExists(2),
            "bad-request": BadRequest("foo"),
            "other": ValueError("secret"),
        }[kind]


class V2AlphaFoo(Resource, version=v(2, "alpha"), name="foo"):
    @get("/foo")
    async def foo(self):
        return {"foo": "baz"}


def test_service_versions():
    service = Service(V1Foo(), V2AlphaFoo())
    assert service.versions == {v(1), v(2, "alpha")}


def test_service_duplicate_resource():
    with pytest.raises(RuntimeError):
        Service(V1Foo(), V1Foo())


@pytest.fixture
def client():
    app = Service(V1Foo(), V2AlphaFoo()).create_app(
        title="test", description="testing"
    )
    return TestClient(app, raise_server_exceptions=False)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"health": "OK"}


@pytest.mark.parametrize("path,expected", [("v1/foo", "bar"), ("v2-alpha/foo", "baz")])
def test_versioned_mount(client, path, expected):
    response = client.get(path)

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"foo": expected}


@pytest.mark.parametrize(
    "kind,status",
    [
        ("does-not-exist", HTTPStatus.NOT_FOUND),
        ("conflict", HTTPStatus.CONFLICT),
        ("already-exists", HTTPStatus.CONFLICT),
        ("bad-request", HTTPStatus.BAD_REQUEST),
        ("other", HTTPStatus.INTERNAL_SERVER_ERROR),
    ],
)
def test_error_status(client, kind, status):
    response = client.get(f"v1/raises/{kind}")

    assert response.status_code == status


def test_internal_error_body(client):
    response = client.get("v1/raises/other")

    assert response.json() == {"message": "Internal server error", "detail": None}


def test_lifespan_hooks():
    on_startup = mock.AsyncMock()
    on_shutdown = mock.AsyncMock()
    app = Service(V1Foo()).create_app(
        title="test",
        description="testing",
        on_startup=[on_startup],
        on_shutdown=[on_shutdown],
    )

    with TestClient(app):
        on_startup.assert_awaited_once()
        assert not on_shutdown.called

    on_shutdown.assert_awaited_once()


def test_failing_startup_refuses_to_start():
    on_startup = mock.AsyncMock(side_effect=RuntimeError("database unreachable"))
    app = Service(V1Foo()).create_app(
        title="test", description="testing", on_startup=[on_startup]
    )

    with pytest.raises(RuntimeError):
        with TestClient(app):
            pass
