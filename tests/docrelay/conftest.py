"""Shared pytest fixtures for docrelay tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to sys.path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path.resolve()) not in sys.path:
    sys.path.insert(0, str(src_path.resolve()))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docrelay.api import create_app
from docrelay.config import RelaySettings
from tests.docrelay.mocks import StubTelegramClient


@pytest.fixture
def settings() -> RelaySettings:
    """Fully configured settings that never read the environment's .env."""
    return RelaySettings(
        _env_file=None,
        bot_token="123456:test-token",
        chat_id="-1001234567890",
    )


@pytest.fixture
def stub_client() -> StubTelegramClient:
    return StubTelegramClient()


@pytest.fixture
def app(settings: RelaySettings, stub_client: StubTelegramClient) -> FastAPI:
    return create_app(settings, stub_client)  # type: ignore[arg-type]


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
