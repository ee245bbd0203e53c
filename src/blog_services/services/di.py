"""Dependency injection setup module.

Every application instance gets its own ServiceRegistry, filled here
according to the service role. Nothing is shared between two registries,
so tests can build as many isolated services as they need.
"""

import httpx
from loguru import logger

from blog_services.constants import ROLE_COMMENTS, ROLE_POSTS, ROLE_RELAY
from blog_services.event_bus import EventBus
from blog_services.events.registration import register_event_handlers
from blog_services.services.comment_service import CommentService
from blog_services.services.event_receiver import EventReceiver
from blog_services.services.post_service import PostService
from blog_services.services.publisher import EventPublisher
from blog_services.services.registry import ServiceRegistry
from blog_services.services.relay_service import EventLog, ParticipantRegistry, RelayService
from blog_services.services.stores import CommentStore, PostStore
from blog_services.settings import Settings


def register_core_services(registry: ServiceRegistry, settings: Settings) -> None:
    """Register services every role needs.

    Args:
        registry: Service registry instance to register services in
        settings: Settings of this application instance
    """
    registry.register_singleton(Settings, settings)


def _register_publisher(registry: ServiceRegistry, settings: Settings, transport: httpx.AsyncBaseTransport | None) -> EventPublisher:
    publisher = EventPublisher(
        settings.event_bus_url,
        timeout=settings.delivery_timeout,
        attempts=settings.publish_attempts,
        transport=transport,
    )
    registry.register_singleton(EventPublisher, publisher)
    return publisher


def _register_event_bus(registry: ServiceRegistry, role: str) -> EventBus:
    bus = EventBus(registry)
    register_event_handlers(role, bus)
    registry.register_singleton(EventBus, bus)
    return bus


def _register_event_receiver(registry: ServiceRegistry, role: str) -> None:
    bus = _register_event_bus(registry, role)
    registry.register_singleton(EventReceiver, EventReceiver(bus))


def register_posts_services(registry: ServiceRegistry, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
    """Register the store, publisher and business services of the posts service."""
    logger.debug("Registering posts services in DI container")

    publisher = _register_publisher(registry, settings, transport)
    store = PostStore()
    registry.register_singleton(PostStore, store)
    registry.register_singleton(PostService, PostService(store, publisher))
    _register_event_receiver(registry, ROLE_POSTS)


def register_comments_services(registry: ServiceRegistry, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
    """Register the store, publisher and business services of the comments service."""
    logger.debug("Registering comments services in DI container")

    publisher = _register_publisher(registry, settings, transport)
    store = CommentStore()
    registry.register_singleton(CommentStore, store)
    registry.register_singleton(CommentService, CommentService(store, publisher, settings.enforce_post_exists))
    _register_event_receiver(registry, ROLE_COMMENTS)


def register_relay_services(registry: ServiceRegistry, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
    """Register the event log, participants, relay service and broadcast bus."""
    logger.debug("Registering relay services in DI container")

    log = EventLog()
    participants = ParticipantRegistry(settings.participant_urls())
    registry.register_singleton(EventLog, log)
    registry.register_singleton(ParticipantRegistry, participants)
    registry.register_singleton(
        RelayService,
        RelayService(
            log,
            participants,
            timeout=settings.delivery_timeout,
            attempts=settings.delivery_attempts,
            transport=transport,
        ),
    )
    _register_event_bus(registry, ROLE_RELAY)


_ROLE_REGISTRARS = {
    ROLE_POSTS: register_posts_services,
    ROLE_COMMENTS: register_comments_services,
    ROLE_RELAY: register_relay_services,
}


def register_all_services(
    registry: ServiceRegistry,
    role: str,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Register core services and the services of one role.

    Args:
        registry: Service registry instance to register services in
        role: One of the service roles in ``blog_services.constants.ROLES``
        settings: Settings of this application instance
        transport: Optional httpx transport for all outbound event calls

    Raises:
        ValueError: If the role is unknown
    """
    if role not in _ROLE_REGISTRARS:
        raise ValueError(f"Unknown service role: {role}. Valid: {', '.join(_ROLE_REGISTRARS)}")

    register_core_services(registry, settings)
    _ROLE_REGISTRARS[role](registry, settings, transport)
