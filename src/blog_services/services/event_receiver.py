"""Inbound side of the event relay for content services."""

from loguru import logger

from blog_services.event_bus import EventBus
from blog_services.events.types import EventEnvelope, parse_event
from blog_services.exceptions import EventParseError


class EventReceiver:
    """Applies inbound envelopes through the service's event bus.

    The event types a service recognises are exactly those with a handler on
    its bus. Everything else, including payloads that cannot be parsed, is
    logged and dropped.
    """

    def __init__(self, bus: EventBus):
        self.bus = bus

    async def receive(self, envelope: EventEnvelope) -> bool:
        """Handle one inbound envelope.

        Returns:
            True if the event reached at least one handler, False if it was ignored
        """
        logger.info(f"Received Event {envelope.type}")

        try:
            event = parse_event(envelope)
        except EventParseError as e:
            logger.warning(f"Discarding event: {e}")
            return False

        if event is None or not self.bus.handles(type(event)):
            logger.debug(f"Ignoring event {envelope.type}: no handler")
            return False

        await self.bus.emit_and_wait(event)
        return True
