"""Upload relay: accepts a multipart file and stores it with Telegram."""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from starlette.requests import Request

from docrelay.config import RelaySettings
from docrelay.errors import ConfigurationError, ValidationError
from docrelay.models import RelayResponse
from docrelay.relay.headers import CORS_HEADERS
from docrelay.telegram import TelegramClient

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"
DEFAULT_FILENAME = "file"
CAPTION_MAX_LENGTH = 1024
UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully. Streaming URL generated."


class UploadRelay:
    """Forwards an uploaded file to `sendDocument` and returns a streaming URL."""

    def __init__(self, settings: RelaySettings, client: TelegramClient) -> None:
        self._settings = settings
        self._client = client

    async def handle(self, request: Request) -> JSONResponse:
        self._ensure_configured()

        async with request.form() as form:
            upload = form.get(UPLOAD_FIELD)
            if not isinstance(upload, UploadFile):
                raise ValidationError(
                    f"No file part in the request (Field name must be '{UPLOAD_FIELD}')."
                )
            filename = upload.filename or DEFAULT_FILENAME
            await upload.seek(0)
            # The spooled file is closed when the form is, so send inside it.
            stored = await self._client.send_document(
                chat_id=self._settings.chat_id,
                caption=self._caption(filename),
                filename=filename,
                content=upload.file,
                content_type=upload.content_type,
            )

        url = build_stream_url(self._base_url(request), stored.file_id, filename)
        logger.info("Upload relayed: filename=%s", filename, extra={"file_id": stored.file_id})

        body = RelayResponse(
            success=True,
            file_id=stored.file_id,
            filename=filename,
            url=url,
            message=UPLOAD_SUCCESS_MESSAGE,
        )
        return JSONResponse(body.to_content(), headers=CORS_HEADERS)

    def _ensure_configured(self) -> None:
        if not self._settings.bot_token_configured:
            raise ConfigurationError("Server Error: BOT_TOKEN is not configured.")
        if not self._settings.chat_id_configured:
            raise ConfigurationError("Server Error: CHAT_ID is not configured.")

    def _caption(self, filename: str) -> str:
        caption = self._settings.caption_template.format(filename=filename)
        return caption[:CAPTION_MAX_LENGTH]

    def _base_url(self, request: Request) -> str:
        if self._settings.public_base_url:
            return self._settings.public_base_url
        return str(request.base_url).rstrip("/")


def build_stream_url(base_url: str, file_id: str, filename: str) -> str:
    """Build the self-hosted streaming URL for a stored reference."""
    query = urlencode({"file_id": file_id, "filename": filename}, quote_via=quote)
    return f"{base_url}/stream_file?{query}"
