"""Stream relay: resolves a stored reference and pipes the file inline."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from starlette.requests import Request

from docrelay.config import RelaySettings
from docrelay.errors import ConfigurationError, ValidationError
from docrelay.relay.headers import relay_headers
from docrelay.telegram import TelegramClient, TelegramDownload

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "file"


class StreamRelay:
    """Resolves `file_id` via `getFile`, then relays the download unbuffered.

    Both provider calls run in sequence for every request; nothing is cached.
    """

    def __init__(self, settings: RelaySettings, client: TelegramClient) -> None:
        self._settings = settings
        self._client = client

    async def handle(self, request: Request) -> StreamingResponse:
        file_id = request.query_params.get("file_id")
        filename = request.query_params.get("filename") or DEFAULT_FILENAME
        if not file_id:
            raise ValidationError("Missing file_id parameter.")
        if not self._settings.bot_token_configured:
            raise ConfigurationError("Server Error: BOT_TOKEN is not configured.")

        metadata = await self._client.get_file(file_id)
        download = await self._client.open_download(metadata.file_path)
        logger.info(
            "Streaming file: filename=%s path=%s",
            filename,
            metadata.file_path,
            extra={"file_id": file_id},
        )

        return StreamingResponse(
            _pipe(download, file_id),
            status_code=200,
            headers=relay_headers(download.headers, filename),
            # _pipe releases once iterated; this covers a body that never starts.
            background=BackgroundTask(download.release),
        )


async def _pipe(download: TelegramDownload, file_id: str) -> AsyncIterator[bytes]:
    relayed = 0
    try:
        async for chunk in download.iter_chunks():
            relayed += len(chunk)
            yield chunk
    finally:
        await download.release()
        logger.debug("Relayed %d bytes", relayed, extra={"file_id": file_id})
