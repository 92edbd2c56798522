"""CLI entrypoint for docrelay."""

from __future__ import annotations

import sys

from dotenv import load_dotenv

load_dotenv()

import fire  # type: ignore[import-untyped]
import uvicorn
from pydantic import ValidationError as SettingsError

from docrelay.api import create_app
from docrelay.config import RelaySettings
from docrelay.logging_setup import configure_logging


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for CLI."""
    configure_logging(log_level=level)


def _load_settings(**overrides: object) -> RelaySettings:
    try:
        return RelaySettings(**{k: v for k, v in overrides.items() if v is not None})
    except SettingsError as e:
        print(f"✗ Config invalid: {e}", file=sys.stderr)
        sys.exit(1)


class DocRelay:
    """docrelay CLI - Telegram-backed file upload and inline streaming relay."""

    def serve(
        self,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ) -> None:
        """Run the relay HTTP server.

        Args:
            host: Bind address (default: HOST or 0.0.0.0)
            port: Bind port (default: PORT or 8000)
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        settings = _load_settings(host=host, port=port, log_level=log_level)
        setup_logging(settings.log_level)

        app = create_app(settings)
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
            log_config=None,
            access_log=False,
        )

    def check(self) -> None:
        """Print the effective configuration and fail if it is incomplete."""
        settings = _load_settings()

        print(f"  Bot token: {settings.redacted_token()}")
        print(f"  Chat id: {settings.chat_id}")
        print(f"  Telegram API: {settings.telegram_api_base}")
        print(f"  Public base URL: {settings.public_base_url or '(request origin)'}")
        print(f"  Stream chunk size: {settings.stream_chunk_size}")

        missing = []
        if not settings.bot_token_configured:
            missing.append("BOT_TOKEN")
        if not settings.chat_id_configured:
            missing.append("CHAT_ID")
        if missing:
            print(f"✗ Config incomplete: set {', '.join(missing)}", file=sys.stderr)
            sys.exit(1)
        print("✓ Config valid")


def main() -> None:
    """Main CLI entrypoint."""
    # Strip --help/-h when it's the only arg so Fire shows its commands list
    if len(sys.argv) == 2 and sys.argv[1] in ("--help", "-h"):
        sys.argv.pop()
    fire.Fire(DocRelay)


if __name__ == "__main__":
    main()
