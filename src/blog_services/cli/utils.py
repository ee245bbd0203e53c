"""CLI utility functions shared across commands."""

import sys

import typer
from loguru import logger
from pydantic import BaseModel

import blog_services


class CliOptions(BaseModel):
    """Global options, kept on the typer context for every command."""

    timeout: float


def configure_cli_logging(level: str = "INFO") -> None:
    """Configure loguru for the CLI (compact format: level + message, no timestamps)."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | <level>{message}</level>",
        level=level,
        colorize=True,
    )
    logger.enable(blog_services.__name__)


def relay_url_option():
    """Option selecting the relay; defaults to the configured event bus URL."""
    return typer.Option(
        None,
        "--relay-url",
        "-r",
        help="Base URL of the event relay (defaults to EVENT_BUS_URL)",
        metavar="<url>",
    )
