# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""CLI interface for the Beeswax client."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from ...clients.beeswax_client import BeeswaxClient, BeeswaxError
from ...clients.resources import RESOURCES, ResourceHelper
from ...config.settings import settings
from ...models.beeswax import BeeswaxResponse, CreativeAssetUpload

app = typer.Typer(
    name="beeswax",
    help="Command line access to the Beeswax buzz API",
    no_args_is_help=True,
)
console = Console()


def _create_client() -> BeeswaxClient:
    """Create Beeswax client from settings."""
    return BeeswaxClient(
        creds={"email": settings.beeswax_email, "password": settings.beeswax_password},
        api_root=settings.beeswax_api_root,
        timeout=settings.beeswax_timeout,
    )


def _parse_json(value: Optional[str], what: str) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error parsing {what}:[/red] {e}")
        raise typer.Exit(1)


def _resource_name(resource: str) -> str:
    name = resource.replace("-", "_")
    if name not in RESOURCES:
        console.print(
            f"[red]Unknown resource:[/red] {resource} "
            f"(choose from {', '.join(RESOURCES)})"
        )
        raise typer.Exit(1)
    return name


def _run(call: Callable[[BeeswaxClient], Awaitable[Any]]) -> Any:
    """Run one client call on a fresh client, mapping errors to exit code 1."""
    logging.basicConfig(level=settings.log_level)

    async def runner() -> Any:
        async with _create_client() as client:
            return await call(client)

    try:
        return asyncio.run(runner())
    except BeeswaxError as e:
        console.print(f"[red]Beeswax error:[/red] {e}")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Request failed:[/red] {e}")
        raise typer.Exit(1)


def _run_resource(
    resource: str, call: Callable[[ResourceHelper], Awaitable[BeeswaxResponse]]
) -> None:
    name = _resource_name(resource)
    result = _run(lambda client: call(getattr(client, name)))
    console.print_json(data=result.model_dump(exclude_none=True))
    if not result.success:
        raise typer.Exit(1)


@app.command()
def resources() -> None:
    """List the supported entity types."""
    table = Table()
    table.add_column("Resource", style="cyan")
    table.add_column("Endpoint")
    table.add_column("ID field", style="magenta")

    for name, descriptor in RESOURCES.items():
        table.add_row(name.replace("_", "-"), descriptor.endpoint, descriptor.id_field)

    console.print(table)


@app.command()
def authenticate() -> None:
    """Log in with the configured credentials."""
    _run(lambda client: client.authenticate())
    console.print(f"[green]Authenticated as {settings.beeswax_email}[/green]")


@app.command()
def find(
    resource: str = typer.Argument(..., help="Entity type, e.g. campaigns"),
    id: int = typer.Argument(..., help="Entity id"),
) -> None:
    """Find a single entity by id."""
    _run_resource(resource, lambda helper: helper.find(id))


@app.command()
def query(
    resource: str = typer.Argument(..., help="Entity type, e.g. campaigns"),
    filter: Optional[str] = typer.Option(
        None, "--filter", "-f", help="JSON object of query fields"
    ),
) -> None:
    """Query one page of entities."""
    filter_obj = _parse_json(filter, "filter")
    _run_resource(resource, lambda helper: helper.query(filter_obj))


@app.command("query-all")
def query_all(
    resource: str = typer.Argument(..., help="Entity type, e.g. campaigns"),
    filter: Optional[str] = typer.Option(
        None, "--filter", "-f", help="JSON object of query fields"
    ),
) -> None:
    """Query every entity matching a filter, following pagination."""
    filter_obj = _parse_json(filter, "filter")
    _run_resource(resource, lambda helper: helper.query_all(filter_obj))


@app.command()
def create(
    resource: str = typer.Argument(..., help="Entity type, e.g. campaigns"),
    body: str = typer.Argument(..., help="JSON object of entity fields"),
) -> None:
    """Create an entity."""
    body_obj = _parse_json(body, "body")
    _run_resource(resource, lambda helper: helper.create(body_obj))


@app.command()
def edit(
    resource: str = typer.Argument(..., help="Entity type, e.g. campaigns"),
    id: int = typer.Argument(..., help="Entity id"),
    body: str = typer.Argument(..., help="JSON object of fields to change"),
    fail_on_not_found: bool = typer.Option(
        False, "--fail-on-not-found", help="Raise instead of reporting not found"
    ),
) -> None:
    """Edit an entity."""
    body_obj = _parse_json(body, "body")
    _run_resource(
        resource, lambda helper: helper.edit(id, body_obj, fail_on_not_found)
    )


@app.command()
def delete(
    resource: str = typer.Argument(..., help="Entity type, e.g. campaigns"),
    id: int = typer.Argument(..., help="Entity id"),
    fail_on_not_found: bool = typer.Option(
        False, "--fail-on-not-found", help="Raise instead of reporting not found"
    ),
) -> None:
    """Delete an entity."""
    _run_resource(resource, lambda helper: helper.delete(id, fail_on_not_found))


@app.command("upload-asset")
def upload_asset(
    source_url: Optional[str] = typer.Option(
        None, "--source-url", "-u", help="URL of the creative content"
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        help="Local creative file",
        exists=True,
        readable=True,
        dir_okay=False,
    ),
    advertiser_id: Optional[int] = typer.Option(None, "--advertiser-id", "-a"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Asset name"),
    notes: Optional[str] = typer.Option(None, "--notes"),
) -> None:
    """Upload a creative asset from a URL or a local file."""
    if (source_url is None) == (file is None):
        console.print("[red]Provide exactly one of --source-url or --file[/red]")
        raise typer.Exit(1)

    params = CreativeAssetUpload(
        source_url=source_url,
        creative_content_bytes=file.read_bytes() if file else None,
        advertiser_id=advertiser_id,
        creative_asset_name=name or (file.name if file else None),
        notes=notes,
    )
    asset = _run(lambda client: client.upload_creative_asset(params))
    console.print_json(data=asset)


if __name__ == "__main__":
    app()
