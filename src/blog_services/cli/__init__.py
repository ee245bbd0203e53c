"""CLI module for the blog services.

Provides command-line tools to inspect and feed the event relay.
"""

from blog_services.cli.app import app

__all__ = ["app"]
