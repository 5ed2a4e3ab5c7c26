"""Identificadores de recursos.

Un identificador es la forma tipada del segmento de ruta que direcciona un
recurso (`/users/<id>`). Se construye con `parse` y su `str()` devuelve
exactamente el segmento de entrada.

Nota:
- Los textos no pueden contener `/` ni ser `.` o `..`: el segmento tiene
  que direccionar `<path>/<id>` y no otra ruta.
- Los enteros solo se aceptan en forma canónica (`"7"`, `"-3"`), así
  `str(IntId.parse(s)) == s` siempre se cumple.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from typedrest.core.domain.errors import Unidentifiable

_CANONICAL_INT_RE = re.compile(r"-?(0|[1-9][0-9]*)")


@dataclass(frozen=True)
class IntId:
    """Identificador entero."""

    value: int

    @classmethod
    def parse(cls, raw: str) -> "IntId":
        if not isinstance(raw, str) or not _CANONICAL_INT_RE.fullmatch(raw):
            raise Unidentifiable(raw, cls.__name__)
        if raw == "-0":
            raise Unidentifiable(raw, cls.__name__)
        return cls(int(raw))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StrId:
    """Identificador de texto libre (slug, UUID, clave natural)."""

    value: str

    @classmethod
    def parse(cls, raw: str) -> "StrId":
        if not isinstance(raw, str) or not raw or "/" in raw or raw in (".", ".."):
            raise Unidentifiable(raw, cls.__name__)
        return cls(raw)

    def __str__(self) -> str:
        return self.value
