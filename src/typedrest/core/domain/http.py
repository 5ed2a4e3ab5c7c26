"""Valores transitorios de petición y respuesta.

Se crean nuevos por llamada y no se reutilizan. Son inmutables: el
inyector de credenciales produce una petición nueva en lugar de mutarla.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping

_REDACTED_HEADERS = frozenset({"authorization", "proxy-authorization"})


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def _freeze(headers: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(headers or {}))


@dataclass(frozen=True)
class Request:
    method: HTTPMethod
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze(self.headers))

    def with_header(self, name: str, value: str) -> "Request":
        """Devuelve una copia con la cabecera `name` fijada (sin distinguir mayúsculas)."""

        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return replace(self, headers=headers)

    def header(self, name: str) -> str | None:
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None

    def redacted_headers(self) -> dict[str, str]:
        """Cabeceras aptas para logging: las credenciales se ocultan."""

        return {
            k: ("***" if k.lower() in _REDACTED_HEADERS else v)
            for k, v in self.headers.items()
        }


@dataclass(frozen=True)
class Response:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze(self.headers))

    def header(self, name: str) -> str | None:
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return None
