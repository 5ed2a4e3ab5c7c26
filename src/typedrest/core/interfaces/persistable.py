"""Contrato de capacidad de los modelos.

Un tipo es gestionable en remoto si declara:
- `identifier_type`: el tipo de identificador que direcciona sus recursos.
- `to_payload()`: su forma estructurada (compatible con JSON).
- `from_payload(payload)`: la operación inversa, que lanza si no encaja.

Cualquier clase que cumpla el contrato sirve para todos los verbos del
cliente. `PersistableModel` (pydantic) es la implementación por defecto.
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, TypeVar, runtime_checkable

IdentifierT = TypeVar("IdentifierT", bound="Identifier")
PersistableT = TypeVar("PersistableT", bound="Persistable")


@runtime_checkable
class Identifier(Protocol):
    """Forma tipada de un segmento de ruta.

    `parse` lanza `Unidentifiable` ante una entrada inválida; `str()` devuelve
    el segmento usado en la URL.
    """

    @classmethod
    def parse(cls: type[IdentifierT], raw: str) -> IdentifierT:
        ...

    def __str__(self) -> str:
        ...


@runtime_checkable
class Persistable(Protocol):
    identifier_type: ClassVar[type[Identifier]]

    def to_payload(self) -> Any:
        ...

    @classmethod
    def from_payload(cls: type[PersistableT], payload: Any) -> PersistableT:
        ...


@runtime_checkable
class Query(Protocol):
    """Filtro de colección aplanado a parámetros de URL."""

    def to_query_items(self) -> list[tuple[str, str]]:
        ...
