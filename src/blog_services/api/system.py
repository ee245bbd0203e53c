"""System endpoints shared by every service."""

from fastapi import APIRouter, Request

from blog_services.models.api_model import PingResponse

router = APIRouter(tags=["System"])


@router.get("/ping", response_model=PingResponse)
async def ping(request: Request) -> PingResponse:
    """
    Simple ping endpoint for connectivity checks.

    Returns:
        PingResponse: ``{"ping": "pong", "service": <role>}``
    """
    return PingResponse(service=request.app.state.role)
