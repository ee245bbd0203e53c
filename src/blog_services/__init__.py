"""Posts, comments and event relay services of the blog."""

from .settings import Settings, get_settings  # noqa: F401

__all__ = ["get_settings", "Settings"]
