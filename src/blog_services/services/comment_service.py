"""Comment service module."""

from __future__ import annotations

from loguru import logger

from blog_services.events.types import CommentCreated, CommentData, CommentModerated, CommentUpdated, to_envelope
from blog_services.exceptions import ResourceNotFoundError
from blog_services.models.base_model import Comment
from blog_services.services.publisher import EventPublisher
from blog_services.services.stores import CommentStore
from blog_services.utils.id_generator import generate_unique_id


class CommentService:
    """Business logic of the comments service.

    Comments are grouped by post id. Post ids are trusted as given unless
    ``enforce_post_exists`` is set, in which case only ids announced by a
    PostCreated event are accepted.
    """

    def __init__(self, store: CommentStore, publisher: EventPublisher, enforce_post_exists: bool = False):
        self.store = store
        self.publisher = publisher
        self.enforce_post_exists = enforce_post_exists

    def list(self, post_id: str) -> list[Comment]:
        """Get the comments of a post, empty for a post without comments."""
        return self.store.for_post(post_id)

    async def create(self, post_id: str, content: str | None) -> list[Comment]:
        """Create a pending comment, announce it, and return all comments of the post.

        Raises:
            ResourceNotFoundError: If post ids are enforced and ``post_id`` is unknown
        """
        if self.enforce_post_exists and post_id not in self.store.known_post_ids():
            raise ResourceNotFoundError("Post", post_id)

        comment = Comment(id=generate_unique_id(self.store), content=content)
        self.store.add(post_id, comment)
        logger.debug(f"Service: create - stored comment {comment.id} for post {post_id}")

        event = CommentCreated(data=CommentData(id=comment.id, post_id=post_id, content=comment.content, status=comment.status))
        await self.publisher.publish(to_envelope(event))
        return self.store.for_post(post_id)

    async def apply_moderation(self, event: CommentModerated) -> bool:
        """Overwrite the status of the moderated comment and announce the update.

        Applying the same decision twice leaves the same status behind.

        Returns:
            True if a comment was updated, False if the event did not match one
        """
        data = event.data
        if data.post_id is None or data.id is None or data.status is None:
            logger.debug(f"Service: apply_moderation - incomplete payload ignored: {data}")
            return False

        comment = self.store.find(data.post_id, data.id)
        if comment is None:
            logger.debug(f"Service: apply_moderation - comment {data.id} of post {data.post_id} not found")
            return False

        comment.status = data.status
        logger.info(f"Comment {comment.id} of post {data.post_id} moderated: {comment.status}")

        updated = CommentUpdated(data=CommentData(id=comment.id, post_id=data.post_id, content=comment.content, status=comment.status))
        await self.publisher.publish(to_envelope(updated))
        return True

    def remember_post(self, post_id: str | None) -> None:
        """Record a post id announced by the posts service."""
        if post_id:
            self.store.remember_post(post_id)
