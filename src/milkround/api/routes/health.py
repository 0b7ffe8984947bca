"""Health endpoints."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/assistant", status_code=status.HTTP_200_OK)
async def health_assistant() -> dict:
    """Check whether the text generation service answers."""
    if not settings.gemini_api_key:
        return {"service": "gemini", "configured": False, "healthy": False}
    from ...services.assistant.gemini_client import check_health

    healthy = await asyncio.to_thread(check_health)
    return {"service": "gemini", "configured": True, "healthy": healthy}
