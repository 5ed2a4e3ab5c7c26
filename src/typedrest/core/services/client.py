"""Type-safe REST client facade.

One coroutine per CRUD verb. Every call builds its own request, applies the
configured credentials, dispatches it through the transport and either
returns the decoded model(s) or raises exactly one `RequestError`:

- 2xx: body decoded into the expected model (all-or-nothing)
- 4xx: `ClientError`
- 5xx: `ServerError`
- no response: `ConnectionFailure`
- undecodable 2xx body: `DecodingError`

Identifier strings are parsed before any network activity, so a malformed
identifier fails with `Unidentifiable` without dispatching anything.
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import TypeVar
from urllib.parse import unquote, urlsplit

from typedrest.adapters.auth import BasicAuth, BearerAuth, auth_from_settings
from typedrest.adapters.http_client import HttpxTransport
from typedrest.adapters.json_codec import JsonCodec
from typedrest.core.config import ClientSettings
from typedrest.core.domain.errors import (
    ConnectionFailure,
    DecodingError,
    RequestError,
    Unidentifiable,
    classify_status,
    is_success,
)
from typedrest.core.domain.http import Request, Response
from typedrest.core.domain.identifiers import IntId, StrId
from typedrest.core.interfaces.auth import AuthScheme
from typedrest.core.interfaces.persistable import Identifier, Persistable
from typedrest.core.interfaces.transport import Transport
from typedrest.core.services.request_builder import QueryInput, RequestBuilder, Verb

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Persistable)

IdentifierInput = Identifier | int | str


def coerce_identifier(value: IdentifierInput, identifier_type: type[Identifier]) -> Identifier:
    """Turn caller input into a typed identifier.

    Strings and ints go through ``identifier_type.parse``; identifier
    instances are taken as-is when they are of ``identifier_type``.
    """

    if isinstance(value, bool):
        raise Unidentifiable(value, identifier_type.__name__)
    if isinstance(value, str):
        return identifier_type.parse(value)
    if isinstance(value, int):
        return identifier_type.parse(str(value))
    if isinstance(value, identifier_type):
        return value
    raise Unidentifiable(value, identifier_type.__name__)


def _default_identifier_type(value: IdentifierInput) -> type[Identifier]:
    if isinstance(value, int):
        return IntId
    if isinstance(value, str):
        return StrId
    return type(value)


def identifier_from_location(location: str | None, identifier_type: type[Identifier]) -> Identifier:
    """Parse the identifier a server returned in its ``Location`` header."""

    if not location:
        raise DecodingError("response carries no Location header with the new identifier")
    segment = urlsplit(location).path.rstrip("/").rsplit("/", 1)[-1]
    try:
        return identifier_type.parse(unquote(segment))
    except Unidentifiable as exc:
        raise DecodingError(f"Location header {location!r} holds no valid identifier") from exc


class RestClient:
    """Client for one remote service.

    Usage::

        async with RestClient("http://localhost:8080") as client:
            client.add_basic_auth("John", "12345")
            users = await client.read_all("/users", User)
            user = await client.read("/users", User, 1)
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: Transport | None = None,
        auth: AuthScheme | None = None,
        settings: ClientSettings | None = None,
        codec: JsonCodec | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.base_url = (base_url or self.settings.base_url).rstrip("/")
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport(settings=self.settings)
        self._codec = codec or JsonCodec()
        self._builder = RequestBuilder(
            self.base_url,
            codec=self._codec,
            default_headers={"User-Agent": self.settings.user_agent},
        )
        self._auth: AuthScheme | None = auth

    @classmethod
    def from_settings(cls, settings: ClientSettings, *, transport: Transport | None = None) -> "RestClient":
        return cls(
            settings.base_url,
            transport=transport,
            auth=auth_from_settings(settings),
            settings=settings,
        )

    @classmethod
    def default(cls) -> "RestClient":
        """Client configured from the environment (``TYPEDREST_*`` / ``.env``)."""

        return cls.from_settings(ClientSettings())

    # -- credentials ---------------------------------------------------

    @property
    def auth(self) -> AuthScheme | None:
        return self._auth

    def set_auth(self, scheme: AuthScheme | None) -> None:
        # Single attribute swap: in-flight requests keep the scheme they read.
        self._auth = scheme

    def add_basic_auth(self, username: str, password: str) -> None:
        self.set_auth(BasicAuth(username, password))

    def add_bearer_auth(self, token: str) -> None:
        self.set_auth(BearerAuth(token))

    def clear_auth(self) -> None:
        self.set_auth(None)

    # -- dispatch ------------------------------------------------------

    async def _send(self, request: Request) -> Response:
        auth = self._auth
        if auth is not None:
            request = auth.apply(request)

        logger.debug("%s %s headers=%s", request.method.value, request.url, request.redacted_headers())
        try:
            response = await self._transport.send(request)
        except RequestError:
            raise
        except (OSError, asyncio.TimeoutError) as exc:
            logger.warning("%s %s failed: %s", request.method.value, request.url, exc)
            raise ConnectionFailure(f"no response from {request.url}: {exc}") from exc

        logger.debug("%s %s -> %s", request.method.value, request.url, response.status)
        if not is_success(response.status):
            raise classify_status(response.status, response.body or b"")
        return response

    # -- verbs ---------------------------------------------------------

    async def create(self, path: str, data: ModelT) -> ModelT:
        """POST ``data`` to the collection and return the stored model."""

        request = self._builder.build(Verb.CREATE, path, data=data)
        response = await self._send(request)
        return self._codec.decode(response.body, type(data))

    async def create_returning_id(self, path: str, data: ModelT) -> tuple[Identifier, ModelT]:
        """POST ``data`` and also return the identifier the server assigned.

        The identifier is read from the ``Location`` header and parsed with
        the model's ``identifier_type``.
        """

        model = type(data)
        request = self._builder.build(Verb.CREATE, path, data=data)
        response = await self._send(request)
        identifier = identifier_from_location(response.header("Location"), model.identifier_type)
        return identifier, self._codec.decode(response.body, model)

    async def read(self, path: str, model: type[ModelT], identifier: IdentifierInput) -> ModelT:
        ident = coerce_identifier(identifier, model.identifier_type)
        request = self._builder.build(Verb.READ, path, identifier=ident)
        response = await self._send(request)
        return self._codec.decode(response.body, model)

    async def read_all(
        self,
        path: str,
        model: type[ModelT],
        query: QueryInput | None = None,
    ) -> list[ModelT]:
        request = self._builder.build(Verb.READ_ALL, path, query=query)
        response = await self._send(request)
        return self._codec.decode_many(response.body, model)

    async def update(self, path: str, identifier: IdentifierInput, data: ModelT) -> ModelT:
        """PUT: replace the resource at ``identifier`` with ``data``."""

        return await self._write(Verb.UPDATE, path, identifier, data)

    async def patch(self, path: str, identifier: IdentifierInput, data: ModelT) -> ModelT:
        """PATCH: partially update the resource at ``identifier``."""

        return await self._write(Verb.PATCH, path, identifier, data)

    async def _write(self, verb: Verb, path: str, identifier: IdentifierInput, data: ModelT) -> ModelT:
        model = type(data)
        ident = coerce_identifier(identifier, model.identifier_type)
        request = self._builder.build(verb, path, identifier=ident, data=data)
        response = await self._send(request)
        return self._codec.decode(response.body, model)

    async def delete(
        self,
        path: str,
        identifier: IdentifierInput | None = None,
        *,
        query: QueryInput | None = None,
        identifier_type: type[Identifier] | None = None,
    ) -> None:
        """DELETE one resource, the whole collection, or the filtered subset.

        Without ``identifier_type``, ints are addressed as `IntId` and strings
        as `StrId`. A missing resource is reported as the server answers it:
        a 404 raises `ClientError`.
        """

        if identifier is None:
            request = self._builder.build(Verb.DELETE_ALL, path, query=query)
        else:
            if identifier_type is None:
                identifier_type = _default_identifier_type(identifier)
            ident = coerce_identifier(identifier, identifier_type)
            request = self._builder.build(Verb.DELETE, path, identifier=ident, query=query)
        await self._send(request)

    # -- lifecycle -----------------------------------------------------

    async def aclose(self) -> None:
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
