"""FastAPI dependencies."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from ..config import Settings
from ..services.api_client import CodeReviewApiClient


def get_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


async def get_api_client(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[CodeReviewApiClient, None]:
    """Dependency for FastAPI to get a code review API client."""
    async with CodeReviewApiClient(
        settings.api_base_url,
        timeout=settings.api_timeout_seconds,
    ) as client:
        yield client
