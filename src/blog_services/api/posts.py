"""
Posts API.

- GET /posts: every post keyed by id
- POST /posts: create a post, announce it to the relay
"""

from fastapi import APIRouter, Body, Depends, status

from blog_services.api.dependencies import service
from blog_services.models.api_model import PostCreateInput
from blog_services.models.base_model import Post
from blog_services.services.post_service import PostService

router = APIRouter(tags=["posts"])


@router.get("/posts", response_model=dict[str, Post])
def list_posts(post_service: PostService = Depends(service(PostService))) -> dict[str, Post]:
    """Get all posts.

    Returns:
        Mapping of post id to post
    """
    return post_service.list()


@router.post("/posts", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    post: PostCreateInput | None = Body(default=None),
    post_service: PostService = Depends(service(PostService)),
) -> Post:
    """Create a new post.

    The response is 201 even when the relay could not be notified.

    Args:
        post: Request body with the title; a missing body or title stores ``None``
        post_service: Post service instance

    Returns:
        The created post
    """
    title = post.title if post is not None else None
    return await post_service.create(title)
