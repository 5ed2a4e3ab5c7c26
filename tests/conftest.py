"""Shared fixtures: user models, an in-memory server and a stub transport.

The server follows the usual routing convention (collection at ``/<name>``,
single resource at ``/<name>/<id>``) and is called directly by the stub
transport, so no socket is ever opened.
"""

from __future__ import annotations

import asyncio
import json
from typing import Callable
from urllib.parse import parse_qsl, urlsplit

import pytest

from typedrest import (
    BasicAuth,
    ClientSettings,
    PersistableModel,
    QueryParams,
    Request,
    Response,
    RestClient,
)

BASE_URL = "http://localhost:8080"


class User(PersistableModel):
    id: int
    name: str


class UserQuery(QueryParams):
    name: str | None = None


def initial_users() -> dict[int, User]:
    return {
        1: User(id=1, name="Mike"),
        2: User(id=2, name="Chris"),
        3: User(id=3, name="Ricardo"),
        4: User(id=4, name="Aaron"),
    }


def initial_auth_users() -> dict[int, User]:
    users = initial_users()
    users[5] = User(id=5, name="Mike")
    return users


def _json_response(status: int, payload: object, headers: dict[str, str] | None = None) -> Response:
    return Response(
        status=status,
        headers={"Content-Type": "application/json", **(headers or {})},
        body=json.dumps(payload).encode("utf-8"),
    )


class UserServer:
    """In-memory user service.

    ``/users`` is open; every path starting with ``/auth`` requires HTTP
    Basic credentials ``John:12345``. ``/authusersid`` answers creates with a
    ``Location`` header.
    """

    credentials = BasicAuth("John", "12345")

    def __init__(self, *, idempotent_delete: bool = False) -> None:
        self.users = initial_users()
        self.auth_users = initial_auth_users()
        self.idempotent_delete = idempotent_delete

    def _store(self, resource: str) -> dict[int, User]:
        return self.auth_users if resource.startswith("auth") else self.users

    def __call__(self, request: Request) -> Response:
        parts = urlsplit(request.url)
        segments = [s for s in parts.path.split("/") if s]
        if not segments or len(segments) > 2:
            return Response(status=404)
        resource = segments[0]
        raw_id = segments[1] if len(segments) == 2 else None
        query = dict(parse_qsl(parts.query))

        if resource.startswith("auth"):
            if request.header("Authorization") != self.credentials.header_value():
                return Response(status=401)

        store = self._store(resource)
        try:
            user_id = int(raw_id) if raw_id is not None else None
        except ValueError:
            return Response(status=400)

        method = request.method.value
        if user_id is None:
            return self._collection(method, resource, store, query, request)
        return self._single(method, store, user_id, request)

    def _collection(self, method, resource, store, query, request) -> Response:
        selected = [u for u in store.values() if "name" not in query or u.name == query["name"]]
        if method == "GET":
            return _json_response(200, [u.model_dump() for u in selected])
        if method == "POST":
            user = User.model_validate_json(request.body)
            store[user.id] = user
            headers = {"Location": str(user.id)} if resource == "authusersid" else {}
            return _json_response(201, user.model_dump(), headers)
        if method == "DELETE":
            for user in selected:
                del store[user.id]
            return Response(status=204)
        return Response(status=405)

    def _single(self, method, store, user_id, request) -> Response:
        if method == "GET":
            if user_id not in store:
                return Response(status=404)
            return _json_response(200, store[user_id].model_dump())
        if method == "PUT":
            user = User.model_validate_json(request.body)
            store[user_id] = user
            return _json_response(200, user.model_dump())
        if method == "PATCH":
            if user_id not in store:
                return Response(status=404)
            merged = {**store[user_id].model_dump(), **json.loads(request.body)}
            store[user_id] = User.model_validate(merged)
            return _json_response(200, store[user_id].model_dump())
        if method == "DELETE":
            if user_id not in store:
                return Response(status=204 if self.idempotent_delete else 404)
            del store[user_id]
            return Response(status=204)
        return Response(status=405)


class StubTransport:
    """Transport that hands each request to ``handler`` and records it."""

    def __init__(self, handler: Callable[[Request], Response]) -> None:
        self.handler = handler
        self.requests: list[Request] = []

    async def send(self, request: Request) -> Response:
        self.requests.append(request)
        # Yield so concurrent calls interleave.
        await asyncio.sleep(0)
        return self.handler(request)


class FailingTransport:
    def __init__(self, exc: BaseException) -> None:
        self.exc = exc
        self.calls = 0

    async def send(self, request: Request) -> Response:
        self.calls += 1
        raise self.exc


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(base_url=BASE_URL, _env_file=None)


@pytest.fixture
def server() -> UserServer:
    return UserServer()


@pytest.fixture
def transport(server: UserServer) -> StubTransport:
    return StubTransport(server)


@pytest.fixture
def client(transport: StubTransport, settings: ClientSettings) -> RestClient:
    return RestClient(BASE_URL, transport=transport, settings=settings)
