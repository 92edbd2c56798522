"""Upload and inline streaming endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.requests import Request

from docrelay.api.dependencies import get_stream_relay, get_upload_relay
from docrelay.relay import StreamRelay, UploadRelay

router = APIRouter(tags=["files"])


@router.post("/upload_file")
async def upload_file(
    request: Request,
    relay: UploadRelay = Depends(get_upload_relay),
) -> JSONResponse:
    """Store the multipart `file` part and return its streaming URL."""
    return await relay.handle(request)


@router.get("/stream_file")
async def stream_file(
    request: Request,
    relay: StreamRelay = Depends(get_stream_relay),
) -> StreamingResponse:
    """Stream a stored file inline by its `file_id`."""
    return await relay.handle(request)
