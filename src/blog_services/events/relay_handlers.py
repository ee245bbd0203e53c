"""Event handlers of the relay."""

from blog_services.event_bus.core import EventHandler
from blog_services.events.types import EventEnvelope
from blog_services.services.relay_service import DeliveryResult, RelayService


class BroadcastHandler(EventHandler[EventEnvelope]):
    """Delivers a recorded envelope to every participant."""

    def __init__(self, relay_service: RelayService):
        self.relay_service = relay_service

    async def handle(self, event: EventEnvelope) -> list[DeliveryResult]:
        return await self.relay_service.broadcast(event)
