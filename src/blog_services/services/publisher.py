"""Client side of the event relay.

Content services call ``EventPublisher.publish`` after every local mutation.
A publish that fails is logged and reported as ``False``; it never raises, so
the caller's local write stands whatever happens to the notification.
"""

import httpx
from loguru import logger
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt, wait_exponential

from blog_services.events.types import EventEnvelope


def log_retry(retry_state: RetryCallState) -> None:
    """Tenacity ``before_sleep`` hook writing through loguru."""
    outcome = retry_state.outcome
    error = outcome.exception() if outcome is not None else None
    logger.debug(f"Attempt {retry_state.attempt_number} failed ({error}), retrying")


class EventPublisher:
    """Posts event envelopes to ``{base_url}/events``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Create a publisher.

        Args:
            base_url: Base URL of the relay
            timeout: Timeout in seconds for one attempt
            attempts: Total attempts per event (1 means no retry)
            transport: Optional httpx transport, used by tests to stand in for the relay
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.attempts = attempts
        self._transport = transport

    @property
    def events_url(self) -> str:
        return f"{self.base_url}/events"

    async def publish(self, envelope: EventEnvelope) -> bool:
        """Send one envelope to the relay.

        Args:
            envelope: The event to send

        Returns:
            True if the relay acknowledged the event, False otherwise
        """
        try:
            await self._post(envelope)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to publish {envelope.type} to {self.events_url}: {e}")
            return False

        logger.debug(f"Published {envelope.type} to {self.events_url}")
        return True

    async def _post(self, envelope: EventEnvelope) -> None:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.attempts),
                wait=wait_exponential(multiplier=0.2, max=2),
                retry=retry_if_exception_type(httpx.HTTPError),
                before_sleep=log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await client.post(self.events_url, json=envelope.model_dump(mode="json"))
                    response.raise_for_status()
