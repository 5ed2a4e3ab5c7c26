"""Codec JSON de cuerpos de petición y respuesta.

Responsabilidad:
- `encode`: modelo -> bytes UTF-8. Un fallo se reporta como `BadRequest`
  (la petición no llega a enviarse).
- `decode` / `decode_many`: bytes -> modelo(s). Todo o nada: cualquier
  fallo (JSON inválido, forma incorrecta, validación) es `DecodingError`.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import ValidationError

from typedrest.core.domain.errors import BadRequest, DecodingError
from typedrest.core.interfaces.persistable import Persistable

ModelT = TypeVar("ModelT", bound=Persistable)

CONTENT_TYPE = "application/json"


class JsonCodec:
    content_type = CONTENT_TYPE

    def encode(self, model: Persistable) -> bytes:
        try:
            payload = model.to_payload()
            return json.dumps(payload, ensure_ascii=False, allow_nan=False, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise BadRequest(f"cannot encode {type(model).__name__}: {exc}") from exc

    def _load(self, body: bytes | None, expected: str) -> Any:
        if not body:
            raise DecodingError(f"empty response body, expected {expected}")
        try:
            return json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodingError(f"response body is not valid JSON: {exc}") from exc

    def _build(self, model: type[ModelT], payload: Any) -> ModelT:
        try:
            return model.from_payload(payload)
        except (ValidationError, TypeError, ValueError, KeyError) as exc:
            raise DecodingError(f"response does not match {model.__name__}: {exc}") from exc

    def decode(self, body: bytes | None, model: type[ModelT]) -> ModelT:
        payload = self._load(body, model.__name__)
        return self._build(model, payload)

    def decode_many(self, body: bytes | None, model: type[ModelT]) -> list[ModelT]:
        payload = self._load(body, f"list[{model.__name__}]")
        if not isinstance(payload, list):
            raise DecodingError(
                f"expected a JSON array of {model.__name__}, got {type(payload).__name__}"
            )
        return [self._build(model, item) for item in payload]
