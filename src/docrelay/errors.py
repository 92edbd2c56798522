"""Error hierarchy for relay handlers."""

from __future__ import annotations

from fastapi import status


class RelayError(RuntimeError):
    """Base exception for relay failures.

    Carries the HTTP status and the human-readable message returned to the
    caller in the JSON envelope. Preserves the original exception via chaining.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        if cause is not None:
            self.__cause__ = cause


class ConfigurationError(RelayError):
    """Required configuration (credential or chat id) is unset."""


class ValidationError(RelayError):
    """Inbound request is missing or has malformed fields."""

    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamError(RelayError):
    """Provider answered with a non-success status or `ok: false`."""

    def __init__(
        self,
        message: str,
        *,
        provider_status: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.provider_status = provider_status


class NetworkError(RelayError):
    """Transport failure while reaching the provider."""
