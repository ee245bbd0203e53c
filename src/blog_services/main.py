"""Main entry point for the blog services using Typer and Pydantic Settings."""

import os

import typer
import uvicorn
from loguru import logger

from blog_services.constants import ROLES
from blog_services.logging import setup_logging
from blog_services.settings import get_settings

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main_callback():
    """Blog services: posts, comments and the event relay."""


ROLE_ARGUMENT = typer.Argument(
    ...,
    help=f"Service to run: {', '.join(ROLES)}",
    metavar="<role>",
    case_sensitive=False,
)  # fmt: skip
HOST_OPTION = typer.Option(
    None,
    help="Host to bind the server to (overrides BLOG_HOST)",
    metavar="<server>",
)  # fmt: skip
PORT_OPTION = typer.Option(
    None,
    help="Port to bind the server to (overrides BLOG_PORT, default depends on the role)",
    metavar="<port>",
)  # fmt: skip
RELOAD_OPTION = typer.Option(
    None,
    help="Enable/disable auto-reload (overrides BLOG_RELOAD)",
)  # fmt: skip
LOG_LEVEL_OPTION = typer.Option(
    None,
    help="Log level (overrides BLOG_LOG_LEVEL)",
    metavar="<level>",
    case_sensitive=False,
)  # fmt: skip
EVENT_BUS_URL_OPTION = typer.Option(
    None,
    help="Base URL of the event relay (overrides EVENT_BUS_URL)",
    metavar="<url>",
)  # fmt: skip
PARTICIPANTS_OPTION = typer.Option(
    None,
    help="Comma-separated participant URLs for the relay (overrides BLOG_PARTICIPANTS)",
    metavar="<urls>",
)  # fmt: skip


def _update_settings(
    role: str,
    host: str | None,
    port: int | None,
    log_level: str | None,
    reload: bool | None,
    event_bus_url: str | None,
    participants: str | None,
) -> None:
    """Update settings with CLI overrides.

    Args:
        role: Service role to run
        host: Host override
        port: Port override
        log_level: Log level override
        reload: Reload override
        event_bus_url: Relay URL override
        participants: Relay participants override
    """
    settings = get_settings()

    role = role.strip().lower()
    if role not in ROLES:
        raise ValueError(f"Invalid role: {role}. Must be one of: {', '.join(ROLES)}")
    settings.role = role
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if log_level is not None:
        settings.log_level = log_level.upper()
    if reload is not None:
        settings.reload = reload
    if event_bus_url is not None:
        settings.event_bus_url = event_bus_url.rstrip("/")
    if participants is not None:
        settings.participants = participants


@app.command()
def run(
    role: str = ROLE_ARGUMENT,
    host: str = HOST_OPTION,
    port: int = PORT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
    reload: bool = RELOAD_OPTION,
    event_bus_url: str = EVENT_BUS_URL_OPTION,
    participants: str = PARTICIPANTS_OPTION,
) -> None:
    """Run one blog service."""
    try:
        _update_settings(role, host, port, log_level, reload, event_bus_url, participants)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    settings = get_settings()
    setup_logging(settings.log_level, settings.role)

    port = settings.resolved_port()
    logger.info(f"Starting {settings.role} service on {settings.host}:{port}")
    logger.info(f"Reload: {settings.reload}")

    if settings.reload:
        # The reloader imports the app in a fresh process that only sees the environment
        os.environ["BLOG_ROLE"] = settings.role
        uvicorn.run(
            "blog_services.app:create_app_from_settings",
            factory=True,
            host=settings.host,
            port=port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
    else:
        from blog_services.app import create_app

        uvicorn.run(
            create_app(settings.role, settings),
            host=settings.host,
            port=port,
            reload=False,
            log_level=settings.log_level.lower(),
        )


if __name__ == "__main__":
    app()
