"""Mock implementations for testing."""

from tests.docrelay.mocks.telegram import StubTelegramClient, StubDownload

__all__ = [
    "StubDownload",
    "StubTelegramClient",
]
