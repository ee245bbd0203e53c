"""
Comments API.

- GET /posts/{post_id}/comments: comments of one post
- POST /posts/{post_id}/comments: create a pending comment, announce it to the relay
"""

from fastapi import APIRouter, Body, Depends, status

from blog_services.api.dependencies import service
from blog_services.models.api_model import CommentCreateInput
from blog_services.models.base_model import Comment
from blog_services.services.comment_service import CommentService

router = APIRouter(tags=["comments"])


@router.get("/posts/{post_id}/comments", response_model=list[Comment])
def list_comments(post_id: str, comment_service: CommentService = Depends(service(CommentService))) -> list[Comment]:
    """Get the comments of a post, empty list for an unknown post."""
    return comment_service.list(post_id)


@router.post("/posts/{post_id}/comments", response_model=list[Comment], status_code=status.HTTP_201_CREATED)
async def create_comment(
    post_id: str,
    comment: CommentCreateInput | None = Body(default=None),
    comment_service: CommentService = Depends(service(CommentService)),
) -> list[Comment]:
    """Create a comment on a post.

    Args:
        post_id: Id of the post, not checked unless post ids are enforced
        comment: Request body with the content
        comment_service: Comment service instance

    Returns:
        All comments of the post, the new one last

    Raises:
        ResourceNotFoundError: If post ids are enforced and the post is unknown (404)
    """
    content = comment.content if comment is not None else None
    return await comment_service.create(post_id, content)
