"""Relay service module.

The relay keeps every event it ever received in an append-only log and
rebroadcasts each one to all registered participants. Delivery is best
effort: one call per participant, failures are logged and reported in the
return value but never raised, queued or compensated.
"""

import asyncio

import httpx
from loguru import logger
from pydantic import BaseModel
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from blog_services.events.types import EventEnvelope
from blog_services.services.publisher import log_retry


class EventLog:
    """Unbounded, append-only, in-memory event history."""

    def __init__(self):
        self._events: list[EventEnvelope] = []

    def append(self, envelope: EventEnvelope) -> int:
        """Append an event and return its position in the log."""
        self._events.append(envelope)
        return len(self._events) - 1

    def all(self) -> list[EventEnvelope]:
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


class ParticipantRegistry:
    """Ordered set of participant base URLs."""

    def __init__(self, urls: list[str] | None = None):
        self._urls: list[str] = []
        for url in urls or []:
            self.register(url)

    def register(self, url: str) -> bool:
        """Add a participant; returns False if it was already registered."""
        url = url.rstrip("/")
        if url in self._urls:
            return False
        self._urls.append(url)
        logger.debug(f"Registered participant {url}")
        return True

    def unregister(self, url: str) -> bool:
        try:
            self._urls.remove(url.rstrip("/"))
            return True
        except ValueError:
            return False

    def all(self) -> list[str]:
        return list(self._urls)

    def __len__(self) -> int:
        return len(self._urls)


class DeliveryResult(BaseModel):
    """Outcome of delivering one event to one participant."""

    participant: str
    delivered: bool
    status_code: int | None = None
    error: str | None = None


class RelayService:
    """Logs and broadcasts events."""

    def __init__(
        self,
        log: EventLog,
        participants: ParticipantRegistry,
        timeout: float = 5.0,
        attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.log = log
        self.participants = participants
        self.timeout = timeout
        self.attempts = attempts
        self._transport = transport

    def history(self) -> list[EventEnvelope]:
        """Return the full log, oldest first."""
        return self.log.all()

    def record(self, envelope: EventEnvelope) -> int:
        """Append an event to the log and return its position."""
        position = self.log.append(envelope)
        logger.info(f"Received Event {envelope.type} (#{position})")
        return position

    async def publish(self, envelope: EventEnvelope) -> list[DeliveryResult]:
        """Append an event to the log, then deliver it to every participant.

        The event is logged before any delivery is attempted, so it is part of
        the history even when every participant is unreachable. The HTTP
        endpoint records and acknowledges first and leaves ``broadcast`` to a
        background task instead of calling this.

        Returns:
            One DeliveryResult per participant, in registration order
        """
        self.record(envelope)
        return await self.broadcast(envelope)

    async def broadcast(self, envelope: EventEnvelope) -> list[DeliveryResult]:
        """Deliver an already recorded event to every participant concurrently.

        Returns:
            One DeliveryResult per participant, in registration order
        """
        targets = self.participants.all()
        logger.debug(f"Broadcasting {envelope.type} to {len(targets)} participants")

        if not targets:
            return []

        payload = envelope.model_dump(mode="json")
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            results = await asyncio.gather(*(self._deliver(client, url, payload, envelope.type) for url in targets))

        failed = [r.participant for r in results if not r.delivered]
        if failed:
            logger.warning(f"Event {envelope.type} not delivered to: {', '.join(failed)}")
        return list(results)

    async def _deliver(self, client: httpx.AsyncClient, url: str, payload: dict, event_type: str) -> DeliveryResult:
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.attempts),
                wait=wait_exponential(multiplier=0.2, max=2),
                retry=retry_if_exception_type(httpx.HTTPError),
                before_sleep=log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await client.post(f"{url}/events", json=payload)
                    response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Participant {url} rejected {event_type}: {e.response.status_code}")
            return DeliveryResult(participant=url, delivered=False, status_code=e.response.status_code, error=str(e))
        except httpx.HTTPError as e:
            logger.error(f"Participant {url} unreachable for {event_type}: {e}")
            return DeliveryResult(participant=url, delivered=False, error=str(e))

        logger.debug(f"Delivered {event_type} to {url}")
        return DeliveryResult(participant=url, delivered=True, status_code=response.status_code)
