"""Relay administration CLI."""

import typer

from blog_services.cli.commands import events
from blog_services.cli.utils import CliOptions, configure_cli_logging
from blog_services.settings import get_settings

app = typer.Typer(
    name="blog-cli",
    help="Blog relay CLI - read the event history and inject events by hand",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    timeout: float = typer.Option(None, "--timeout", "-t", min=0.1, help="Seconds to wait for the relay (defaults to BLOG_DELIVERY_TIMEOUT)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request made to the relay"),
):
    """Talk to a running relay over HTTP."""
    if verbose:
        configure_cli_logging("DEBUG")
    ctx.obj = CliOptions(timeout=timeout or get_settings().delivery_timeout)


app.add_typer(events.app, name="events")
