"""API models for the blog services.

Request bodies are deliberately lenient: absent fields become ``None`` and
unknown fields are ignored.
"""

from pydantic import BaseModel, ConfigDict


class PostCreateInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None


class CommentCreateInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str | None = None


class RelayAck(BaseModel):
    """Relay response to a published event."""

    status: str = "OK"


class PingResponse(BaseModel):
    """Ping response model."""

    ping: str = "pong"
    service: str
