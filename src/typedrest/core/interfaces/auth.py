"""Contrato del inyector de credenciales."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from typedrest.core.domain.http import Request


@runtime_checkable
class AuthScheme(Protocol):
    """Transformación pura aplicada justo antes de enviar.

    Devuelve una petición nueva con la credencial añadida; la recibida no se
    modifica.
    """

    def apply(self, request: Request) -> Request:
        ...
