"""Taxonomía de errores del cliente.

Regla:
- Toda operación pública del cliente devuelve un valor o lanza exactamente
  uno de estos errores. Las excepciones de httpx, json o pydantic nunca
  llegan al llamador sin envolver.

Jerarquía:
- `BadRequest`: la petición no se pudo construir (identificador, query o
  cuerpo inválidos). `Unidentifiable` es el caso particular del
  identificador.
- `HTTPStatusError`: el servidor respondió fuera de 2xx. Se divide en
  `ClientError` (4xx) y `ServerError` (5xx y respuestas fuera de convención).
- `DecodingError`: respuesta 2xx cuyo cuerpo no encaja con el modelo.
- `ConnectionFailure`: no hubo respuesta (DNS, conexión rechazada, timeout).
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any


class RequestError(Exception):
    """Base de todos los errores que el cliente entrega al llamador."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(RequestError):
    """La petición se abortó antes de enviarse."""


class Unidentifiable(BadRequest):
    """Un segmento de ruta no se pudo convertir en identificador."""

    def __init__(self, raw: object, identifier_type: str | None = None) -> None:
        target = f" as {identifier_type}" if identifier_type else ""
        super().__init__(f"cannot parse identifier {raw!r}{target}")
        self.raw = raw
        self.identifier_type = identifier_type


class DecodingError(RequestError):
    """El cuerpo de una respuesta exitosa no encaja con el modelo esperado."""


class ConnectionFailure(RequestError):
    """No se recibió respuesta del servidor."""


class HTTPStatusError(RequestError):
    """El servidor respondió con un estado fuera de 2xx."""

    def __init__(self, status: int, body: bytes = b"", message: str | None = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message or f"HTTP {status} {self.reason}".rstrip())

    @property
    def reason(self) -> str:
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return ""

    @property
    def is_unauthorized(self) -> bool:
        return self.status in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN)

    def json(self) -> Any | None:
        """Devuelve el cuerpo decodificado como JSON, o `None` si no lo es."""

        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None


class ClientError(HTTPStatusError):
    """Respuesta 4xx."""


class ServerError(HTTPStatusError):
    """Respuesta 5xx, o un estado que el cliente no sabe interpretar."""


def is_success(status: int) -> bool:
    return 200 <= status <= 299


def classify_status(status: int, body: bytes = b"") -> HTTPStatusError:
    """Traduce un estado no exitoso a su error de la taxonomía."""

    if 400 <= status <= 499:
        return ClientError(status, body)
    if 500 <= status <= 599:
        return ServerError(status, body)
    # 1xx o 3xx no seguidas: el servidor salió de la convención de rutas.
    return ServerError(status, body, message=f"unexpected HTTP status {status}")
