"""Event type definitions for the blog services.

Events travel between services as a plain ``{"type": ..., "data": ...}``
envelope. Inside a service an envelope is parsed into one of a closed set of
typed variants so that handlers can be registered on the event bus per class.
Envelopes with an unknown type tag have no variant and are ignored by every
consumer.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from blog_services.exceptions import EventParseError


class EventEnvelope(BaseModel):
    """Wire format of every event exchanged through the relay."""

    model_config = ConfigDict(extra="allow")

    type: str
    data: Any = Field(default_factory=dict)


class WireModel(BaseModel):
    """Base for payloads that use camelCase names on the wire."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PostData(WireModel):
    id: str | None = None
    title: str | None = None


class CommentData(WireModel):
    id: str | None = None
    post_id: str | None = Field(default=None, alias="postId")
    content: str | None = None
    status: str | None = None


class PostCreated(WireModel):
    """Published by the posts service after a post is stored."""

    type: Literal["PostCreated"] = "PostCreated"
    data: PostData


class CommentCreated(WireModel):
    """Published by the comments service after a comment is stored."""

    type: Literal["CommentCreated"] = "CommentCreated"
    data: CommentData


class CommentModerated(WireModel):
    """Moderation decision for a single comment."""

    type: Literal["CommentModerated"] = "CommentModerated"
    data: CommentData


class CommentUpdated(WireModel):
    """Published by the comments service after a moderation decision was applied."""

    type: Literal["CommentUpdated"] = "CommentUpdated"
    data: CommentData


DomainEvent = PostCreated | CommentCreated | CommentModerated | CommentUpdated

EVENT_TYPES: dict[str, type[WireModel]] = {
    "PostCreated": PostCreated,
    "CommentCreated": CommentCreated,
    "CommentModerated": CommentModerated,
    "CommentUpdated": CommentUpdated,
}


def parse_event(envelope: EventEnvelope) -> DomainEvent | None:
    """Turn a wire envelope into its typed variant.

    Args:
        envelope: The envelope as received over HTTP

    Returns:
        The typed event, or None when the type tag is not a known variant

    Raises:
        EventParseError: If the tag is known but the payload does not fit the variant
    """
    event_class = EVENT_TYPES.get(envelope.type)
    if event_class is None:
        return None

    data = envelope.data if envelope.data is not None else {}
    try:
        return event_class.model_validate({"type": envelope.type, "data": data})  # type: ignore[return-value]
    except ValidationError as e:
        raise EventParseError(envelope.type, f"{e.error_count()} validation error(s)") from e


def to_envelope(event: DomainEvent) -> EventEnvelope:
    """Serialize a typed event back into its wire envelope."""
    return EventEnvelope(type=event.type, data=event.data.model_dump(by_alias=True))
