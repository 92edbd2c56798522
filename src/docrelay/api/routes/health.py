"""Health endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from docrelay.api.dependencies import get_settings
from docrelay.config import RelaySettings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    bot_token_configured: bool
    chat_id_configured: bool


@router.get("/health", response_model=HealthResponse)
async def get_health(settings: RelaySettings = Depends(get_settings)) -> HealthResponse:
    """Report whether the relay has the configuration it needs; never calls Telegram."""
    configured = settings.bot_token_configured and settings.chat_id_configured
    return HealthResponse(
        status="ok" if configured else "degraded",
        bot_token_configured=settings.bot_token_configured,
        chat_id_configured=settings.chat_id_configured,
    )
