"""Shared fixtures and fake transports for the blog services tests."""

import asyncio
import json
from collections.abc import Callable

import httpx
import pytest

from blog_services.event_bus import EventBus
from blog_services.settings import Settings


class RecordingTransport(httpx.MockTransport):
    """Stands in for a remote service: records requests and answers with a fixed status."""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={})

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]


class UnreachableTransport(httpx.MockTransport):
    """Every request fails as if nothing were listening."""

    def __init__(self):
        self.attempts = 0
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.attempts += 1
        raise httpx.ConnectError("Connection refused", request=request)


class SlowTransport(httpx.MockTransport):
    """A participant that answers only after ``delay`` seconds."""

    def __init__(self, delay: float):
        self.delay = delay
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(self.delay)
        self.requests.append(request)
        return httpx.Response(200, json={})


class RoutingTransport(httpx.AsyncBaseTransport):
    """Routes requests by host and port to in-process ASGI applications.

    Unmounted addresses behave like a service that is down.
    """

    def __init__(self):
        self._routes: dict[str, httpx.AsyncBaseTransport] = {}
        self._apps: list = []

    def mount(self, base_url: str, app) -> None:
        url = httpx.URL(base_url)
        self._routes[f"{url.host}:{url.port}"] = httpx.ASGITransport(app=app)
        self._apps.append(app)

    async def settle(self) -> None:
        """Wait until no mounted service has event deliveries in flight."""
        buses = [app.state.registry.get(EventBus) for app in self._apps if EventBus in app.state.registry]
        while any(bus.pending_count for bus in buses):
            for bus in buses:
                await bus.wait_for_pending()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        key = f"{request.url.host}:{request.url.port}"
        transport = self._routes.get(key)
        if transport is None:
            raise httpx.ConnectError(f"No service listening on {key}", request=request)
        return await transport.handle_async_request(request)


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Build Settings that ignore the developer's environment and .env file."""

    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def relay_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def unreachable_transport() -> UnreachableTransport:
    return UnreachableTransport()
