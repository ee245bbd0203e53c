"""Event receiver endpoint of the content services."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from blog_services.api.dependencies import service
from blog_services.events.types import EventEnvelope
from blog_services.services.event_receiver import EventReceiver

router = APIRouter(tags=["events"])


def _to_envelope(payload: Any) -> EventEnvelope:
    """Read ``type`` and ``data`` from any JSON body; anything else has no type."""
    if not isinstance(payload, dict):
        return EventEnvelope(type="")

    event_type = payload.get("type")
    return EventEnvelope(type="" if event_type is None else str(event_type), data=payload.get("data"))


@router.post("/events")
async def receive_event(
    payload: Any = Body(default=None),
    receiver: EventReceiver = Depends(service(EventReceiver)),
) -> dict:
    """Receive one event from the relay.

    Always answers with an empty object: bodies that are not events, unknown
    types and malformed payloads are logged and dropped by the receiver.
    """
    await receiver.receive(_to_envelope(payload))
    return {}
