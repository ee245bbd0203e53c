"""Relay inspection commands."""

import json

import httpx
import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from blog_services.cli.utils import CliOptions, relay_url_option
from blog_services.settings import get_settings

app = typer.Typer(help="Inspect and feed the event relay")
console = Console()


def make_client(timeout: float) -> httpx.Client:
    """Create the HTTP client used to talk to the relay."""
    return httpx.Client(timeout=timeout)


def _resolve_relay_url(relay_url: str | None) -> str:
    return (relay_url or get_settings().event_bus_url).rstrip("/")


def _options(ctx: typer.Context) -> CliOptions:
    """Global options; commands invoked without the main callback use the settings."""
    if isinstance(ctx.obj, CliOptions):
        return ctx.obj
    return CliOptions(timeout=get_settings().delivery_timeout)


@app.command("list")
def list_events(ctx: typer.Context, relay_url: str = relay_url_option()):
    """Print every event in the relay history.

    Examples:
        blog-cli events list
        blog-cli events list --relay-url http://localhost:4005
    """
    url = f"{_resolve_relay_url(relay_url)}/events"
    try:
        with make_client(_options(ctx).timeout) as client:
            logger.debug(f"GET {url}")
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[red]Error: cannot read relay history from {url}: {e}[/red]")
        raise typer.Exit(1) from e

    events = response.json()
    if not events:
        console.print("[yellow]The relay has not received any event yet[/yellow]")
        return

    table = Table(title=f"Relay history ({len(events)} events)")
    table.add_column("#", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Data")
    for position, event in enumerate(events):
        table.add_row(str(position), str(event.get("type")), json.dumps(event.get("data"), ensure_ascii=False))
    console.print(table)


@app.command()
def publish(
    ctx: typer.Context,
    event_type: str = typer.Argument(..., help="Type tag of the event, e.g. CommentModerated", metavar="<type>"),
    data: str = typer.Option("{}", "--data", "-d", help="Event payload as a JSON object", metavar="<json>"),
    relay_url: str = relay_url_option(),
):
    """Publish one event through the relay.

    Examples:
        blog-cli events publish CommentModerated -d '{"postId": "1a2b3c4d", "id": "9f8e7d6c", "status": "approved"}'
    """
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: --data is not valid JSON: {e}[/red]")
        raise typer.Exit(1) from e

    url = f"{_resolve_relay_url(relay_url)}/events"
    try:
        with make_client(_options(ctx).timeout) as client:
            logger.debug(f"POST {url} {event_type}")
            response = client.post(url, json={"type": event_type, "data": payload})
            response.raise_for_status()
    except httpx.HTTPError as e:
        console.print(f"[red]Error: cannot publish to {url}: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]Published {event_type} to {url}[/green]")
