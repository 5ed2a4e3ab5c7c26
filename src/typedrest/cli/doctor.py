"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console

from typedrest.adapters.http_client import build_async_client
from typedrest.cli.ui_components import build_settings_table
from typedrest.core.config import ClientSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: ClientSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.base_url)
        return True, f"HTTP {response.status_code}"
    except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run(ctx: typer.Context) -> None:
    """Show the effective configuration and check connectivity to the base URL."""

    settings: ClientSettings = (ctx.obj or {}).get("settings") or ClientSettings()

    ok_http, detail_http = asyncio.run(_check_http(settings))
    table = build_settings_table(settings, checks=[("HTTP connectivity", ok_http, detail_http)])
    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)
