"""
Relay API.

- POST /events: append an event to the log, acknowledge, then broadcast it to every participant
- GET /events: the full event log, oldest first
"""

from fastapi import APIRouter, Depends

from blog_services.api.dependencies import service
from blog_services.event_bus import EventBus
from blog_services.events.types import EventEnvelope
from blog_services.models.api_model import RelayAck
from blog_services.services.relay_service import RelayService

router = APIRouter(tags=["relay"])


@router.post("/events", response_model=RelayAck)
async def publish_event(
    envelope: EventEnvelope,
    relay_service: RelayService = Depends(service(RelayService)),
    bus: EventBus = Depends(service(EventBus)),
) -> RelayAck:
    """Accept one event.

    The event is in the history before the acknowledgement is sent. Delivery
    runs afterwards in a background task, so participants never delay the
    response and their failures never change it.
    """
    relay_service.record(envelope)
    bus.emit(envelope)
    return RelayAck()


@router.get("/events", response_model=list[EventEnvelope])
def get_events(relay_service: RelayService = Depends(service(RelayService))) -> list[EventEnvelope]:
    """Get every event the relay has received."""
    return relay_service.history()
