"""In-memory stores owned by the content services.

Nothing here is persisted: a store lives exactly as long as the application
instance that created it.
"""

from blog_services.models.base_model import Comment, Post


class PostStore:
    """Posts keyed by id, in insertion order."""

    def __init__(self):
        self._posts: dict[str, Post] = {}

    def add(self, post: Post) -> Post:
        self._posts[post.id] = post
        return post

    def get(self, post_id: str) -> Post | None:
        return self._posts.get(post_id)

    def all(self) -> dict[str, Post]:
        """Return a shallow copy of the whole collection."""
        return dict(self._posts)

    def clear(self) -> None:
        self._posts.clear()

    def __contains__(self, post_id: object) -> bool:
        return post_id in self._posts

    def __len__(self) -> int:
        return len(self._posts)


class CommentStore:
    """Comments grouped by the id of the post they were addressed to.

    Post ids are not checked against anything: addressing a comment to an
    unknown post creates the bucket for that id.
    """

    def __init__(self):
        self._by_post: dict[str, list[Comment]] = {}
        self._known_post_ids: set[str] = set()

    def add(self, post_id: str, comment: Comment) -> list[Comment]:
        """Append a comment to a post's bucket and return the bucket."""
        comments = self._by_post.setdefault(post_id, [])
        comments.append(comment)
        return comments

    def for_post(self, post_id: str) -> list[Comment]:
        """Return a copy of the comments of a post, empty if there are none."""
        return list(self._by_post.get(post_id, []))

    def find(self, post_id: str, comment_id: str) -> Comment | None:
        for comment in self._by_post.get(post_id, []):
            if comment.id == comment_id:
                return comment
        return None

    def all(self) -> dict[str, list[Comment]]:
        return {post_id: list(comments) for post_id, comments in self._by_post.items()}

    def remember_post(self, post_id: str) -> None:
        """Record a post id announced by the posts service."""
        self._known_post_ids.add(post_id)

    def known_post_ids(self) -> set[str]:
        return set(self._known_post_ids)

    def clear(self) -> None:
        self._by_post.clear()
        self._known_post_ids.clear()

    def __contains__(self, comment_id: object) -> bool:
        return any(comment.id == comment_id for comments in self._by_post.values() for comment in comments)
