"""FastAPI server wiring for docrelay."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response, status
from starlette.requests import Request

from docrelay import __version__
from docrelay.api.errors import register_exception_handlers
from docrelay.api.routes import register_routes
from docrelay.config import RelaySettings
from docrelay.relay import StreamRelay, UploadRelay
from docrelay.relay.headers import CORS_HEADERS
from docrelay.telegram import TelegramClient

logger = logging.getLogger(__name__)


def create_app(
    settings: RelaySettings | None = None,
    client: TelegramClient | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Both relays share `settings` and one `TelegramClient`, whose session is
    closed when the application shuts down.
    """
    settings = settings or RelaySettings()
    client = client or TelegramClient(settings)

    @asynccontextmanager
    async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
        if not settings.bot_token_configured or not settings.chat_id_configured:
            logger.warning(
                "Relay started without full configuration: bot_token=%s chat_id=%s",
                settings.bot_token_configured,
                settings.chat_id_configured,
            )
        yield
        await client.close()

    app = FastAPI(title="docrelay", version=__version__, lifespan=_lifespan)
    app.state.settings = settings
    app.state.upload_relay = UploadRelay(settings, client)
    app.state.stream_relay = StreamRelay(settings, client)

    register_exception_handlers(app)
    register_routes(app)

    @app.middleware("http")
    async def _cors_preflight(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)
        return await call_next(request)

    return app
