"""Esquemas de credenciales.

Cada esquema produce el valor de una cabecera y lo aplica sobre una copia
de la petición. Son inmutables: el cliente los comparte entre peticiones
concurrentes sin locks.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field

from typedrest.core.config import ClientSettings
from typedrest.core.domain.http import Request
from typedrest.core.interfaces.auth import AuthScheme


@dataclass(frozen=True)
class BasicAuth:
    """HTTP Basic: `Authorization: Basic base64(username:password)`."""

    username: str
    password: str = field(repr=False)

    def header_value(self) -> str:
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def apply(self, request: Request) -> Request:
        return request.with_header("Authorization", self.header_value())


@dataclass(frozen=True)
class BearerAuth:
    token: str = field(repr=False)

    def header_value(self) -> str:
        return f"Bearer {self.token}"

    def apply(self, request: Request) -> Request:
        return request.with_header("Authorization", self.header_value())


@dataclass(frozen=True)
class HeaderAuth:
    """Credencial en una cabecera arbitraria (p.ej. `X-API-Key`)."""

    name: str
    value: str = field(repr=False)

    def header_value(self) -> str:
        return self.value

    def apply(self, request: Request) -> Request:
        return request.with_header(self.name, self.value)


def auth_from_settings(settings: ClientSettings) -> AuthScheme | None:
    """Esquema derivado de la configuración. Bearer tiene prioridad sobre Basic."""

    if settings.bearer_token is not None:
        return BearerAuth(settings.bearer_token.get_secret_value())
    if settings.username is not None and settings.password is not None:
        return BasicAuth(settings.username, settings.password.get_secret_value())
    return None
