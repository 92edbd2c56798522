"""Process-wide relay configuration."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BOT_TOKEN_REQUIRED = "BOT_TOKEN_REQUIRED"
CHAT_ID_REQUIRED = "CHAT_ID_REQUIRED"


class RelaySettings(BaseSettings):
    """Read-only settings shared by both relays.

    Built once at startup from the environment (and `.env`), then passed by
    reference to each handler constructor.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    bot_token: str = BOT_TOKEN_REQUIRED
    chat_id: str = CHAT_ID_REQUIRED
    telegram_api_base: str = "https://api.telegram.org"
    public_base_url: str | None = None
    caption_template: str = "Uploaded via Web App: {filename}"
    stream_chunk_size: int = 64 * 1024
    request_timeout_s: float | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @field_validator("bot_token", mode="before")
    @classmethod
    def _default_bot_token(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return BOT_TOKEN_REQUIRED
        return value

    @field_validator("chat_id", mode="before")
    @classmethod
    def _default_chat_id(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return CHAT_ID_REQUIRED
        return value

    @field_validator("telegram_api_base")
    @classmethod
    def _strip_api_base(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("public_base_url")
    @classmethod
    def _strip_public_base_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.rstrip("/") or None

    @field_validator("stream_chunk_size")
    @classmethod
    def _positive_chunk_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("stream_chunk_size must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return str(value).upper()

    @property
    def bot_token_configured(self) -> bool:
        return self.bot_token != BOT_TOKEN_REQUIRED

    @property
    def chat_id_configured(self) -> bool:
        return self.chat_id != CHAT_ID_REQUIRED

    def redacted_token(self) -> str:
        """Return the credential with all but its bot id masked."""
        if not self.bot_token_configured:
            return self.bot_token
        bot_id, sep, _ = self.bot_token.partition(":")
        if not sep:
            return "***"
        return f"{bot_id}:***"
