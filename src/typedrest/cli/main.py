"""typedrest command line.

Thin wrapper over `RestClient` for poking at a service by hand: fetch a
collection or a single resource as generic JSON documents, delete
resources, and run the environment doctor.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from typedrest.cli import doctor
from typedrest.cli.ui_components import build_documents_table
from typedrest.core.config import ClientSettings
from typedrest.core.domain.errors import RequestError
from typedrest.core.domain.models import JsonDocument
from typedrest.core.services.client import RestClient

app = typer.Typer(no_args_is_help=True, help="Type-safe REST client: inspect and manage remote resources.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def build_client(settings: ClientSettings) -> RestClient:
    return RestClient.from_settings(settings)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _settings(ctx: typer.Context) -> ClientSettings:
    return ctx.obj["settings"]


def _fail(exc: RequestError) -> NoReturn:
    _err_console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override TYPEDREST_BASE_URL."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override TYPEDREST_LOG_LEVEL."),
) -> None:
    overrides: dict[str, str] = {}
    if base_url:
        overrides["base_url"] = base_url
    if log_level:
        overrides["log_level"] = log_level
    try:
        settings = ClientSettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    configure_logging(settings.log_level)
    ctx.obj = {"settings": settings}


@app.command()
def get(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Resource path, e.g. /users"),
    identifier: Optional[str] = typer.Argument(None, help="Identifier of a single resource."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """Read a collection, or one resource when IDENTIFIER is given."""

    async def _run() -> list[JsonDocument]:
        async with build_client(_settings(ctx)) as client:
            if identifier is None:
                return await client.read_all(path, JsonDocument)
            return [await client.read(path, JsonDocument, identifier)]

    try:
        documents = asyncio.run(_run())
    except RequestError as exc:
        _fail(exc)

    if as_json:
        payload = [doc.to_payload() for doc in documents]
        if identifier is not None:
            payload = payload[0]
        _console.print_json(json.dumps(payload, ensure_ascii=False))
        return
    _console.print(build_documents_table(documents, title=path))


@app.command()
def delete(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Resource path, e.g. /users"),
    identifier: Optional[str] = typer.Argument(None, help="Identifier of a single resource."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation when deleting a collection."),
) -> None:
    """Delete one resource, or the whole collection when IDENTIFIER is omitted."""

    if identifier is None and not yes:
        typer.confirm(f"Delete every resource under {path}?", abort=True)

    async def _run() -> None:
        async with build_client(_settings(ctx)) as client:
            await client.delete(path, identifier)

    try:
        asyncio.run(_run())
    except RequestError as exc:
        _fail(exc)
    _console.print(f"[green]Deleted[/green] {path}{'/' + identifier if identifier else ''}")


def run() -> None:
    app()
