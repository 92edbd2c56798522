"""JSON envelope error handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from docrelay.errors import RelayError
from docrelay.models import RelayResponse
from docrelay.relay.headers import CORS_HEADERS

logger = logging.getLogger(__name__)

ENDPOINT_NOT_FOUND_MESSAGE = "Endpoint not found."
UNEXPECTED_ERROR_MESSAGE = "An unexpected server error occurred."


def error_response(message: str, *, status_code: int) -> JSONResponse:
    """Build a failure envelope carrying the static CORS headers."""
    return JSONResponse(
        status_code=status_code,
        content=RelayResponse(success=False, message=message).to_content(),
        headers=CORS_HEADERS,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Convert every failure into the `{success: false, message}` envelope."""

    @app.exception_handler(RelayError)
    async def _relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc.__cause__ is not None,
            )
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return error_response(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        _ = request
        logger.info("Request validation failed: %s", exc.errors())
        return error_response("Request validation failed.", status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        _ = request
        # Unknown paths and known paths with the wrong method are both "not found".
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return error_response(ENDPOINT_NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)
        detail = str(exc.detail) if exc.detail is not None else "Request failed"
        return error_response(detail, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception for path=%s", request.url.path, exc_info=exc)
        return error_response(
            UNEXPECTED_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
