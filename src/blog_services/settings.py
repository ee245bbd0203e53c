"""Application configuration using Pydantic Settings.

This module centralizes runtime configuration for every blog service. Values
can be provided via environment variables (preferred) or fall back to the
defaults below. A ``Settings`` instance is intended to be retrieved via
``get_settings`` which caches the object for reuse across the process.

Environment variable prefix: ``BLOG_`` (e.g. ``BLOG_HOST``). The relay URL is
additionally read from the bare ``EVENT_BUS_URL`` variable.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blog_services.constants import DEFAULT_EVENT_BUS_URL, DEFAULT_PARTICIPANTS, DEFAULT_PORTS, ROLES


class Settings(BaseSettings):
    """Runtime settings shared by the posts, comments and relay services.

    Attributes map directly to environment variables using the ``BLOG_``
    prefix (case-insensitive). For example, ``host`` <- ``BLOG_HOST``.
    """

    # Server settings
    role: str | None = Field(
        default=None,
        description="Service role to run: posts, comments or relay",
    )  # fmt: skip
    host: str = Field(
        default="0.0.0.0",
        description="Host interface to bind the server",
    )  # fmt: skip
    port: int | None = Field(
        default=None,
        description="Server port; each role falls back to its own default port",
    )  # fmt: skip
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )
    reload: bool = Field(
        default=False,
        description="Enable auto-reload in development",
    )  # fmt: skip

    # Event relay settings
    event_bus_url: str = Field(
        default=DEFAULT_EVENT_BUS_URL,
        validation_alias=AliasChoices("BLOG_EVENT_BUS_URL", "EVENT_BUS_URL"),
        description="Base URL of the event relay",
    )  # fmt: skip
    participants: str = Field(
        default=",".join(DEFAULT_PARTICIPANTS),
        description="Comma-separated base URLs the relay broadcasts to",
    )  # fmt: skip
    delivery_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Timeout in seconds for every outbound event call",
    )  # fmt: skip
    delivery_attempts: int = Field(
        default=1,
        ge=1,
        description="Attempts per participant when the relay broadcasts an event",
    )  # fmt: skip
    publish_attempts: int = Field(
        default=1,
        ge=1,
        description="Attempts when a content service notifies the relay",
    )  # fmt: skip

    # Domain settings
    enforce_post_exists: bool = Field(
        default=False,
        description="Reject comments addressed to a post never announced by a PostCreated event",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()

        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}
        if v_upper not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(allowed))}")

        return v_upper

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: str | None) -> str | None:
        """Normalize and validate the service role."""
        if v is None or not str(v).strip():
            return None

        role = str(v).strip().lower()
        if role not in ROLES:
            raise ValueError(f"Invalid role: {v}. Must be one of: {', '.join(ROLES)}")

        return role

    def resolved_port(self) -> int:
        """Return the configured port, or the default port of the role."""
        if self.port is not None:
            return self.port
        if self.role is None:
            raise ValueError("No port configured and no role to derive a default from")
        return DEFAULT_PORTS[self.role]

    @field_validator("event_bus_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store base URLs without a trailing slash."""
        return v.rstrip("/")

    def participant_urls(self) -> list[str]:
        """Return the configured participant base URLs, de-duplicated in order."""
        urls: list[str] = []
        for raw in self.participants.split(","):
            url = raw.strip().rstrip("/")
            if url and url not in urls:
                urls.append(url)
        return urls

    model_config = SettingsConfigDict(
        env_prefix="BLOG_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    The first invocation reads environment variables / .env file; subsequent
    calls reuse the same object to ensure consistent config.
    """

    return Settings()


__all__ = ["Settings", "get_settings"]
