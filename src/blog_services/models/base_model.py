from pydantic import BaseModel

from blog_services.constants import COMMENT_STATUS_PENDING


class Post(BaseModel):
    """A blog post owned by the posts service."""

    id: str
    title: str | None = None


class Comment(BaseModel):
    """A comment owned by the comments service, stored under its post id."""

    id: str
    content: str | None = None
    status: str = COMMENT_STATUS_PENDING
