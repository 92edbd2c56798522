"""FastAPI dependency helpers."""

from __future__ import annotations

from typing import cast

from starlette.requests import Request

from docrelay.config import RelaySettings
from docrelay.errors import ConfigurationError
from docrelay.relay import StreamRelay, UploadRelay


def _require_state(request: Request, name: str) -> object:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise ConfigurationError("Server Error: relay is not initialized.")
    return value


async def get_settings(request: Request) -> RelaySettings:
    return cast(RelaySettings, _require_state(request, "settings"))


async def get_upload_relay(request: Request) -> UploadRelay:
    return cast(UploadRelay, _require_state(request, "upload_relay"))


async def get_stream_relay(request: Request) -> StreamRelay:
    return cast(StreamRelay, _require_state(request, "stream_relay"))
