"""Async client for the Telegram Bot API endpoints the relays depend on."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any, BinaryIO
from urllib.parse import quote

import aiohttp
import pydantic

from docrelay.config import RelaySettings
from docrelay.errors import NetworkError, UpstreamError
from docrelay.models import StoredFileMetadata, StoredFileRef, select_stored_file

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT_S = 30.0


class TelegramDownload:
    """Open response for a stored file.

    The body has not been read yet. Iterate `iter_chunks()` to pull it and call
    `release()` once done (or abandoned) to return the connection.
    """

    def __init__(self, response: aiohttp.ClientResponse, *, chunk_size: int) -> None:
        self._response = response
        self._chunk_size = chunk_size
        self._released = False

    @property
    def status(self) -> int:
        return self._response.status

    @property
    def reason(self) -> str:
        return self._response.reason or ""

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        async for chunk in self._response.content.iter_chunked(self._chunk_size):
            yield chunk

    async def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._response.release()


class TelegramClient:
    """Bot API client shared by the upload and stream relays.

    Holds one pooled `aiohttp.ClientSession`, created lazily and closed on
    application shutdown. Each method performs exactly one outbound request and
    never retries.
    """

    def __init__(self, settings: RelaySettings) -> None:
        self._settings = settings
        self._api_base = settings.telegram_api_base
        self._timeout_s = settings.request_timeout_s
        self._session: aiohttp.ClientSession | None = None

    async def send_document(
        self,
        *,
        chat_id: str,
        caption: str,
        filename: str,
        content: bytes | BinaryIO,
        content_type: str | None = None,
    ) -> StoredFileRef:
        """Store a file via `sendDocument` and return its reference.

        `content` may be an open file object, which aiohttp streams into the
        multipart body without reading it into memory first.
        """
        form = aiohttp.FormData()
        form.add_field("chat_id", chat_id)
        form.add_field("caption", caption)
        form.add_field(
            "document",
            content,
            filename=filename,
            content_type=content_type or "application/octet-stream",
        )

        session = await self._get_session()
        try:
            async with session.post(self._method_url("sendDocument"), data=form) as response:
                if not response.ok:
                    error_text = await response.text()
                    raise UpstreamError(
                        f"Telegram API Upload Failed: {response.status} - {error_text}",
                        provider_status=response.status,
                    )
                payload = await self._read_json(response, "Telegram API Error")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise self._network_error(exc) from exc

        if not payload.get("ok"):
            description = payload.get("description") or "Unknown error"
            raise UpstreamError(f"Telegram API Error: {description}")

        stored = select_stored_file(payload.get("result"))
        logger.info(
            "Stored via sendDocument: filename=%s kind=%s",
            filename,
            stored.kind.value,
            extra={"file_id": stored.file_id},
        )
        return stored

    async def get_file(self, file_id: str) -> StoredFileMetadata:
        """Resolve a reference to the provider's internal file path."""
        session = await self._get_session()
        try:
            async with session.get(
                self._method_url("getFile"), params={"file_id": file_id}
            ) as response:
                # Failures arrive as `ok: false` bodies, whatever the status.
                payload = await self._read_json(response, "Telegram getFile API Error")
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise self._network_error(exc) from exc

        if not payload.get("ok"):
            description = payload.get("description") or "Unknown error"
            raise UpstreamError(f"Telegram getFile API Error: {description}")

        result = payload.get("result")
        if not isinstance(result, dict) or not result.get("file_path"):
            raise UpstreamError("Telegram getFile API Error: response contains no file_path")

        try:
            return StoredFileMetadata(
                file_id=str(result.get("file_id") or file_id),
                file_path=str(result["file_path"]),
                file_unique_id=result.get("file_unique_id"),
                file_size=result.get("file_size"),
            )
        except pydantic.ValidationError as exc:
            raise UpstreamError(
                "Telegram getFile API Error: response contains malformed file metadata",
                cause=exc,
            ) from exc

    async def open_download(self, file_path: str) -> TelegramDownload:
        """Start fetching a stored file and return the unread response."""
        url = f"{self._api_base}/file/bot{self._settings.bot_token}/{quote(file_path, safe='/')}"
        session = await self._get_session()
        try:
            response = await session.get(url, timeout=self._download_timeout())
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise self._network_error(exc) from exc

        if not response.ok:
            reason = response.reason or ""
            response.release()
            raise UpstreamError(
                f"Failed to fetch file from Telegram: {reason}",
                provider_status=response.status,
            )

        return TelegramDownload(response, chunk_size=self._settings.stream_chunk_size)

    async def close(self) -> None:
        """Close the pooled HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            # An unset timeout means no total cap, not aiohttp's 300 s default.
            timeout = aiohttp.ClientTimeout(
                total=self._timeout_s, sock_connect=CONNECT_TIMEOUT_S
            )
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    def _download_timeout(self) -> aiohttp.ClientTimeout:
        # The body may be relayed for longer than any total budget, so only
        # connecting and each idle read are bounded.
        return aiohttp.ClientTimeout(
            total=None, sock_connect=CONNECT_TIMEOUT_S, sock_read=self._timeout_s
        )

    def _method_url(self, method: str) -> str:
        return f"{self._api_base}/bot{self._settings.bot_token}/{method}"

    async def _read_json(self, response: aiohttp.ClientResponse, label: str) -> dict[str, Any]:
        try:
            payload = await response.json(content_type=None)
        except ValueError as exc:
            raise UpstreamError(
                f"{label}: HTTP {response.status} with unparseable body",
                provider_status=response.status,
                cause=exc,
            ) from exc
        if not isinstance(payload, dict):
            raise UpstreamError(
                f"{label}: HTTP {response.status} with unexpected body",
                provider_status=response.status,
            )
        return payload

    def _network_error(self, exc: BaseException) -> NetworkError:
        detail = str(exc) or type(exc).__name__
        if self._settings.bot_token_configured:
            detail = detail.replace(self._settings.bot_token, "***")
        return NetworkError(
            f"Network error while contacting Telegram: {detail}",
            cause=exc if isinstance(exc, Exception) else None,
        )
