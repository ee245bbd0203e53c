"""Post service module."""

from __future__ import annotations

from loguru import logger

from blog_services.events.types import PostCreated, PostData, to_envelope
from blog_services.models.base_model import Post
from blog_services.services.publisher import EventPublisher
from blog_services.services.stores import PostStore
from blog_services.utils.id_generator import generate_unique_id


class PostService:
    """Business logic of the posts service.

    The store is mutated before the relay is notified. A failed notification
    is logged by the publisher and otherwise ignored.
    """

    def __init__(self, store: PostStore, publisher: EventPublisher):
        self.store = store
        self.publisher = publisher

    def list(self) -> dict[str, Post]:
        """Get every post keyed by id."""
        return self.store.all()

    async def create(self, title: str | None) -> Post:
        """Create a post and announce it with a PostCreated event."""
        post = self.store.add(Post(id=generate_unique_id(self.store), title=title))
        logger.debug(f"Service: create - stored post {post.id}")

        await self.publisher.publish(to_envelope(PostCreated(data=PostData(id=post.id, title=post.title))))
        return post
