"""Contrato del transporte HTTP.

Reglas de diseño:
- `send` es asíncrono y devuelve la respuesta tal cual, sea cual sea el
  estado HTTP.
- Si no se recibió respuesta (DNS, conexión, timeout) lanza
  `ConnectionFailure`. El Core nunca abre sockets directamente.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from typedrest.core.domain.http import Request, Response


@runtime_checkable
class Transport(Protocol):
    async def send(self, request: Request) -> Response:
        """Envía `request` y devuelve estado, cabeceras y cuerpo."""

        ...
