"""Request construction for the CRUD verbs.

Given a base URL, a resource path, a verb and the optional identifier,
body and query, this module produces a fully addressed `Request`:

- URL: ``base + path [+ "/" + identifier] [+ "?" + query]``
- method: picked from `METHOD_BY_VERB`
- body: JSON-encoded model with its content type

Anything that makes the request impossible to build raises `BadRequest`
before the transport is ever touched.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping
from urllib.parse import quote, urlencode

from typedrest.adapters.json_codec import JsonCodec
from typedrest.core.domain.errors import BadRequest
from typedrest.core.domain.http import HTTPMethod, Request
from typedrest.core.domain.models import query_items_from_mapping
from typedrest.core.interfaces.persistable import Identifier, Persistable, Query


class Verb(str, Enum):
    CREATE = "create"
    READ = "read"
    READ_ALL = "read_all"
    UPDATE = "update"
    PATCH = "patch"
    DELETE = "delete"
    DELETE_ALL = "delete_all"

    @property
    def requires_identifier(self) -> bool:
        return self in _IDENTIFIED_VERBS

    @property
    def accepts_query(self) -> bool:
        return self in (Verb.READ_ALL, Verb.DELETE_ALL)

    @property
    def carries_body(self) -> bool:
        return self in (Verb.CREATE, Verb.UPDATE, Verb.PATCH)


_IDENTIFIED_VERBS = frozenset({Verb.READ, Verb.UPDATE, Verb.PATCH, Verb.DELETE})

METHOD_BY_VERB: dict[Verb, HTTPMethod] = {
    Verb.CREATE: HTTPMethod.POST,
    Verb.READ: HTTPMethod.GET,
    Verb.READ_ALL: HTTPMethod.GET,
    Verb.UPDATE: HTTPMethod.PUT,
    Verb.PATCH: HTTPMethod.PATCH,
    Verb.DELETE: HTTPMethod.DELETE,
    Verb.DELETE_ALL: HTTPMethod.DELETE,
}

QueryInput = Query | Mapping[str, Any]


def encode_query(query: QueryInput) -> str:
    """Percent-encode a query model (or mapping) as ``k=v&k2=v2``."""

    if isinstance(query, Mapping):
        items = query_items_from_mapping(query)
    elif isinstance(query, Query):
        items = query.to_query_items()
    else:
        raise BadRequest(f"unsupported query type: {type(query).__name__}")
    return urlencode(items, quote_via=quote)


def join_url(base_url: str, path: str) -> str:
    base = base_url.rstrip("/")
    if not path:
        return base
    return f"{base}/{path.lstrip('/')}"


def build_url(
    base_url: str,
    path: str,
    identifier: Identifier | None = None,
    query: QueryInput | None = None,
) -> str:
    if identifier is not None and query is not None:
        raise BadRequest("a call addresses one resource or filters a collection, not both")

    url = join_url(base_url, path)
    if identifier is not None:
        segment = str(identifier)
        if not segment:
            raise BadRequest("identifier renders to an empty path segment")
        url = f"{url.rstrip('/')}/{quote(segment, safe='')}"
    if query is not None:
        encoded = encode_query(query)
        if encoded:
            url = f"{url}?{encoded}"
    return url


class RequestBuilder:
    """Builds `Request` values for one base URL.

    Stateless apart from its configuration, so a single builder is shared
    by every in-flight call of a client.
    """

    def __init__(
        self,
        base_url: str,
        *,
        codec: JsonCodec | None = None,
        default_headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.codec = codec or JsonCodec()
        self.default_headers = dict(default_headers or {})

    def build(
        self,
        verb: Verb,
        path: str,
        *,
        identifier: Identifier | None = None,
        data: Persistable | None = None,
        query: QueryInput | None = None,
    ) -> Request:
        if verb.requires_identifier and identifier is None:
            raise BadRequest(f"{verb.value} requires an identifier")
        if identifier is not None and not verb.requires_identifier:
            raise BadRequest(f"{verb.value} does not take an identifier")
        if query is not None and not verb.accepts_query:
            raise BadRequest(f"{verb.value} does not take a query")
        if verb.carries_body and data is None:
            raise BadRequest(f"{verb.value} requires a body")

        url = build_url(self.base_url, path, identifier, query)
        headers = {"Accept": self.codec.content_type, **self.default_headers}

        body: bytes | None = None
        if data is not None:
            body = self.codec.encode(data)
            headers["Content-Type"] = self.codec.content_type

        return Request(method=METHOD_BY_VERB[verb], url=url, headers=headers, body=body)
