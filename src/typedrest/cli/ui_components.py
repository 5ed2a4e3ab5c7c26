"""Componentes de UI para CLI (Rich).

Tablas reutilizadas por `get` y `doctor`.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich.table import Table

from typedrest.core.config import ClientSettings
from typedrest.core.domain.models import JsonDocument


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def build_documents_table(documents: Sequence[JsonDocument], title: str = "Resources") -> Table:
    """Una columna por clave, en orden de primera aparición."""

    rows = [doc.to_payload() for doc in documents]
    columns: list[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)

    table = Table(title=title)
    for name in columns:
        table.add_column(name, style="cyan" if name == "id" else "white")
    for row in rows:
        table.add_row(*(_cell(row.get(name)) for name in columns))
    return table


def build_settings_table(settings: ClientSettings, checks: Iterable[tuple[str, bool, str]] = ()) -> Table:
    table = Table(title="typedrest doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.timeout_seconds:g}s")
    table.add_row("User-Agent", "OK", settings.user_agent)
    if settings.bearer_token is not None:
        table.add_row("Auth", "OK", "Bearer token")
    elif settings.username is not None and settings.password is not None:
        table.add_row("Auth", "OK", f"Basic (user {settings.username!r})")
    elif settings.username is not None:
        table.add_row("Auth", "WARN", "username set without password -> no auth")
    else:
        table.add_row("Auth", "OPTIONAL", "No credentials configured")

    for name, ok, detail in checks:
        table.add_row(name, "OK" if ok else "FAIL", detail)
    return table
