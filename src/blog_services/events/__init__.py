"""Event system for the blog services.

Wire envelopes and the typed event variants parsed from them. Handlers and
their per-role registration live in ``registration``.
"""

from blog_services.events.types import (
    CommentCreated,
    CommentModerated,
    CommentUpdated,
    EventEnvelope,
    PostCreated,
    parse_event,
    to_envelope,
)

__all__ = [
    "CommentCreated",
    "CommentModerated",
    "CommentUpdated",
    "EventEnvelope",
    "PostCreated",
    "parse_event",
    "to_envelope",
]
