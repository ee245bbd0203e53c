"""Per-role registration of event handlers."""

from loguru import logger

from blog_services.constants import ROLE_COMMENTS, ROLE_RELAY
from blog_services.event_bus import EventBus
from blog_services.events.comment_handlers import CommentModeratedHandler, PostCreatedHandler
from blog_services.events.relay_handlers import BroadcastHandler
from blog_services.events.types import CommentModerated, EventEnvelope, PostCreated


def register_event_handlers(role: str, bus: EventBus) -> None:
    """Register the handlers of one service role on its event bus.

    The posts service recognises no event types; it only logs what it receives.
    The relay handles raw envelopes of any type.
    """
    logger.debug(f"Registering event handlers for {role}")

    if role == ROLE_COMMENTS:
        bus.on(CommentModerated, CommentModeratedHandler)
        bus.on(PostCreated, PostCreatedHandler)
    elif role == ROLE_RELAY:
        bus.on(EventEnvelope, BroadcastHandler)

    registered = [event_type.__name__ for event_type in bus.get_registered_events()]
    logger.info(f"Event handlers registered: {', '.join(registered) or 'none'}")
