"""Configuración del cliente.

- Centraliza variables de entorno (pydantic-settings) con prefijo
  `TYPEDREST_` y soporte de `.env`.
- Los adaptadores (transporte HTTP, credenciales) y la CLI leen de aquí.
"""

from __future__ import annotations

import logging

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Configuración central del cliente REST."""

    model_config = SettingsConfigDict(
        env_prefix="TYPEDREST_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="http://localhost:8080",
        min_length=1,
        description="Endpoint base al que se añaden las rutas de recursos.",
    )
    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="typedrest/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Seguir redirecciones 3xx en el transporte.",
    )

    username: str | None = Field(
        default=None,
        description="Usuario para HTTP Basic (requiere `password`).",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Contraseña para HTTP Basic.",
    )
    bearer_token: SecretStr | None = Field(
        default=None,
        description="Token Bearer. Tiene prioridad sobre Basic si ambos existen.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING...).",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

