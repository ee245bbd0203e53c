"""Event handlers of the comments service."""

from blog_services.event_bus.core import EventHandler
from blog_services.events.types import CommentModerated, PostCreated
from blog_services.services.comment_service import CommentService


class CommentModeratedHandler(EventHandler[CommentModerated]):
    """Applies a moderation decision to the stored comment."""

    def __init__(self, comment_service: CommentService):
        self.comment_service = comment_service

    async def handle(self, event: CommentModerated) -> bool:
        return await self.comment_service.apply_moderation(event)


class PostCreatedHandler(EventHandler[PostCreated]):
    """Remembers announced post ids for optional referential checks."""

    def __init__(self, comment_service: CommentService):
        self.comment_service = comment_service

    async def handle(self, event: PostCreated) -> None:
        self.comment_service.remember_post(event.data.id)
