"""Modelos base (Pydantic v2).

- `PersistableModel`: implementación por defecto del contrato `Persistable`.
  Las subclases declaran sus campos y, si no usan enteros, su
  `identifier_type`.
- `QueryParams`: base para filtros de colección. Cada campo es una clave
  de query; los campos `None` se omiten.
- `JsonDocument`: modelo genérico (acepta cualquier objeto JSON), usado por
  la CLI cuando no hay un modelo declarado.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any, ClassVar, Mapping

from pydantic import BaseModel, ConfigDict

from typedrest.core.domain.identifiers import IntId, StrId
from typedrest.core.interfaces.persistable import Identifier


class PersistableModel(BaseModel):
    """Modelo gestionable en remoto.

    Ejemplo::

        class User(PersistableModel):
            id: int
            name: str
    """

    identifier_type: ClassVar[type[Identifier]] = IntId

    def to_payload(self) -> Any:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_payload(cls, payload: Any):
        return cls.model_validate(payload)


class JsonDocument(PersistableModel):
    """Objeto JSON arbitrario, direccionado por segmentos de texto."""

    model_config = ConfigDict(extra="allow")

    identifier_type: ClassVar[type[Identifier]] = StrId


def encode_query_value(value: Any) -> str:
    """Convierte un valor de campo a su texto de query (sin percent-encoding)."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return encode_query_value(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
        return ",".join(encode_query_value(v) for v in items)
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return str(value)


def query_items_from_mapping(values: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), encode_query_value(value)) for key, value in values.items() if value is not None]


class QueryParams(BaseModel):
    """Filtro de colección.

    Ejemplo::

        class UserQuery(QueryParams):
            name: str | None = None
            min_age: int | None = None
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_query_items(self) -> list[tuple[str, str]]:
        items: list[tuple[str, str]] = []
        # model_fields conserva el orden de declaración.
        for name, info in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue
            key = info.alias or name
            items.append((key, encode_query_value(value)))
        return items
