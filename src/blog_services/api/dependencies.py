"""API dependencies for FastAPI endpoints."""

from collections.abc import Callable
from typing import TypeVar

from fastapi import Request

T = TypeVar("T")


def service(service_type: type[T]) -> Callable[[Request], T]:
    """FastAPI dependency that provides a service of the current app by type.

    Args:
        service_type: The type of service to retrieve from the app's registry

    Returns:
        A callable that returns the requested service instance

    Example:
        ```python
        @router.get("/posts")
        def list_posts(post_service: PostService = Depends(service(PostService))):
            return post_service.list()
        ```
    """

    def get_service(request: Request) -> T:
        return request.app.state.registry.get(service_type)

    return get_service
