"""Tests for CLI module."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from docrelay.cli import DocRelay, main


@pytest.fixture(autouse=True)
def relay_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOT_TOKEN", "42:secret")
    monkeypatch.setenv("CHAT_ID", "-100")
    for name in ("HOST", "PORT", "LOG_LEVEL", "PUBLIC_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


def test_serve_runs_uvicorn_with_overrides() -> None:
    """serve builds the app and hands it to uvicorn with CLI overrides."""
    # Given: uvicorn and logging setup are patched
    with (
        patch("docrelay.cli.uvicorn.run") as run,
        patch("docrelay.cli.configure_logging") as configure,
    ):
        # When: Serving on a custom port
        DocRelay().serve(port=9000, log_level="debug")

    # Then: Logging is configured and uvicorn receives the bind settings
    configure.assert_called_once_with(log_level="DEBUG")
    run.assert_called_once()
    kwargs = run.call_args.kwargs
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9000
    assert kwargs["log_level"] == "debug"
    assert run.call_args.args[0].state.settings.chat_id == "-100"


def test_check_passes_with_complete_config(capsys: pytest.CaptureFixture[str]) -> None:
    """check prints the redacted configuration and succeeds."""
    # When: Checking a complete configuration
    DocRelay().check()

    # Then: The token is redacted and the config reported valid
    out = capsys.readouterr().out
    assert "42:***" in out
    assert "secret" not in out
    assert "✓ Config valid" in out


def test_check_fails_without_token(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """check exits 1 naming the missing variables."""
    # Given: No bot token
    monkeypatch.delenv("BOT_TOKEN")

    # When / Then: The command exits with an error
    with pytest.raises(SystemExit) as exc_info:
        DocRelay().check()
    assert exc_info.value.code == 1
    assert "BOT_TOKEN" in capsys.readouterr().err


def test_serve_exits_on_invalid_settings(capsys: pytest.CaptureFixture[str]) -> None:
    """Invalid configuration is reported instead of raising."""
    # Given: An invalid port override
    with patch("docrelay.cli.uvicorn.run") as run, pytest.raises(SystemExit) as exc_info:
        DocRelay().serve(port="not-a-port")  # type: ignore[arg-type]

    # Then: The process exits before starting the server
    assert exc_info.value.code == 1
    assert "Config invalid" in capsys.readouterr().err
    run.assert_not_called()


def test_main_strips_lone_help_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    """A lone --help is dropped so fire lists the commands."""
    # Given: argv with only --help
    monkeypatch.setattr("sys.argv", ["docrelay", "--help"])
    fire_mock = MagicMock()
    monkeypatch.setattr("docrelay.cli.fire.Fire", fire_mock)

    # When: Running main
    main()

    # Then: fire is invoked on the CLI class with the flag removed
    fire_mock.assert_called_once_with(DocRelay)
    assert sys.argv == ["docrelay"]
