"""FastAPI application factory for the blog services.

One factory builds any of the three services. All service state (stores,
event log, event bus, publisher) is created per application instance and
reachable through ``app.state.registry``.
"""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from blog_services.api.api_router import build_router
from blog_services.api.system import router as system_router
from blog_services.constants import DEFAULT_PORTS, ROLE_RELAY, ROLES
from blog_services.event_bus import EventBus
from blog_services.exception_handlers import register_exception_handlers
from blog_services.services.di import register_all_services
from blog_services.services.registry import ServiceRegistry
from blog_services.settings import Settings, get_settings
from blog_services.utils.version import get_version


def _log_server_endpoints_summary(app: FastAPI) -> None:
    """Log the service URL, its endpoints and where it sends events."""
    settings: Settings = app.state.settings
    role: str = app.state.role

    server_url = f"http://{settings.host}:{settings.port or DEFAULT_PORTS[role]}"
    logger.info(f"{role} service running at: {server_url}")

    logger.info("Available endpoints:")
    for path, operations in app.openapi()["paths"].items():
        methods = ",".join(sorted(method.upper() for method in operations))
        logger.info(f"   {methods:<10} {path}")

    if role == ROLE_RELAY:
        logger.info(f"Broadcasting to: {', '.join(settings.participant_urls()) or 'nobody'}")
    else:
        logger.info(f"Publishing events to: {settings.event_bus_url}")


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Handle startup and shutdown events for a service."""
    _log_server_endpoints_summary(app)

    yield

    logger.info(f"{app.state.role} service shutting down")
    bus: EventBus = app.state.registry.get(EventBus)
    if bus.pending_count:
        logger.info(f"Waiting for {bus.pending_count} pending event deliveries")
        await bus.wait_for_pending()


def create_app(
    role: str,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the FastAPI application of one service role.

    Args:
        role: ``posts``, ``comments`` or ``relay``
        settings: Settings to use; defaults to the cached process settings
        transport: Optional httpx transport for every outbound event call

    Returns:
        A fully wired FastAPI application

    Raises:
        ValueError: If the role is unknown
    """
    if role not in ROLES:
        raise ValueError(f"Unknown service role: {role}. Valid: {', '.join(ROLES)}")

    settings = settings or get_settings()

    app = FastAPI(
        lifespan=app_lifespan,
        title=f"Blog {role} service",
        version=get_version(),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.role = role  # type: ignore[attr-defined]
    app.state.settings = settings  # type: ignore[attr-defined]

    registry = ServiceRegistry()
    register_all_services(registry, role, settings, transport)
    app.state.registry = registry  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(build_router(role))

    logger.debug(f"{role} application created")
    return app


def create_app_from_settings() -> FastAPI:
    """Factory for ``uvicorn --factory``: the role comes from ``BLOG_ROLE``."""
    settings = get_settings()
    if settings.role is None:
        raise ValueError("No service role configured: set BLOG_ROLE or use 'blog-services run <role>'")
    return create_app(settings.role, settings)
