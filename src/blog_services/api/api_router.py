"""API router initialization, one router per service role."""

from fastapi import APIRouter
from loguru import logger

from blog_services.api.comments import router as comments_router
from blog_services.api.events import router as events_router
from blog_services.api.posts import router as posts_router
from blog_services.api.relay import router as relay_router
from blog_services.constants import ROLE_COMMENTS, ROLE_POSTS, ROLE_RELAY


def build_router(role: str) -> APIRouter:
    """Create the router that mounts the endpoints of one service role.

    Raises:
        ValueError: If the role is unknown
    """
    routers = {
        ROLE_POSTS: (posts_router, events_router),
        ROLE_COMMENTS: (comments_router, events_router),
        ROLE_RELAY: (relay_router,),
    }
    if role not in routers:
        raise ValueError(f"Unknown service role: {role}")

    router = APIRouter()
    for sub_router in routers[role]:
        router.include_router(sub_router)

    logger.debug(f"API router initialized for {role}")
    return router
