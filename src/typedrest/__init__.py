"""typedrest: cliente REST tipado y asíncrono.

Declara un modelo, apunta a una ruta y opera en remoto::

    from typedrest import PersistableModel, RestClient

    class User(PersistableModel):
        id: int
        name: str

    async with RestClient("http://localhost:8080") as client:
        users = await client.read_all("/users", User)
"""

from __future__ import annotations

from typedrest.adapters.auth import BasicAuth, BearerAuth, HeaderAuth
from typedrest.adapters.http_client import HttpxTransport, build_async_client
from typedrest.adapters.json_codec import JsonCodec
from typedrest.core.config import ClientSettings
from typedrest.core.domain.errors import (
    BadRequest,
    ClientError,
    ConnectionFailure,
    DecodingError,
    HTTPStatusError,
    RequestError,
    ServerError,
    Unidentifiable,
)
from typedrest.core.domain.http import HTTPMethod, Request, Response
from typedrest.core.domain.identifiers import IntId, StrId
from typedrest.core.domain.models import JsonDocument, PersistableModel, QueryParams
from typedrest.core.interfaces.auth import AuthScheme
from typedrest.core.interfaces.persistable import Identifier, Persistable, Query
from typedrest.core.interfaces.transport import Transport
from typedrest.core.services.client import RestClient
from typedrest.core.services.request_builder import RequestBuilder, Verb

__version__ = "0.1.0"

__all__ = [
    "AuthScheme",
    "BadRequest",
    "BasicAuth",
    "BearerAuth",
    "ClientError",
    "ClientSettings",
    "ConnectionFailure",
    "DecodingError",
    "HTTPMethod",
    "HTTPStatusError",
    "HeaderAuth",
    "HttpxTransport",
    "Identifier",
    "IntId",
    "JsonCodec",
    "JsonDocument",
    "Persistable",
    "PersistableModel",
    "Query",
    "QueryParams",
    "Request",
    "RequestBuilder",
    "RequestError",
    "Response",
    "RestClient",
    "ServerError",
    "StrId",
    "Transport",
    "Unidentifiable",
    "Verb",
    "build_async_client",
]
