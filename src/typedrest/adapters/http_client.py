"""Transporte HTTP sobre httpx.

- `build_async_client` estandariza timeouts, cabeceras y redirecciones.
- `HttpxTransport` implementa el contrato `Transport`: convierte un
  `Request` del dominio en una llamada httpx y devuelve un `Response`.
  Cualquier fallo sin respuesta (incluido un bucle de redirecciones) se
  reporta como `ConnectionFailure`; un `Content-Encoding` inválido, como
  `DecodingError`.
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from typedrest.core.config import ClientSettings
from typedrest.core.domain.errors import ConnectionFailure, DecodingError
from typedrest.core.domain.http import Request, Response

logger = logging.getLogger(__name__)


def build_async_client(
    settings: ClientSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la configuración.

    `transport` permite inyectar un `httpx.MockTransport` en tests.
    """

    settings = settings or ClientSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers=headers,
        transport=transport,
    )


class HttpxTransport:
    """Transporte por defecto del cliente."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        settings: ClientSettings | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or build_async_client(settings)

    async def send(self, request: Request) -> Response:
        try:
            resp = await self._client.request(
                request.method.value,
                request.url,
                headers=dict(request.headers),
                content=request.body,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", request.method.value, request.url)
            raise ConnectionFailure(f"request timed out: {request.method.value} {request.url}") from exc
        except httpx.DecodingError as exc:
            logger.warning("%s %s: undecodable content: %s", request.method.value, request.url, exc)
            raise DecodingError(f"cannot decode response content from {request.url}: {exc}") from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.warning("%s %s failed: %s", request.method.value, request.url, exc)
            raise ConnectionFailure(f"no response from {request.url}: {exc}") from exc

        return Response(
            status=resp.status_code,
            headers=dict(resp.headers.items()),
            body=resp.content or None,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
