"""
Tests for the mic-login command line interface.
"""

import io

import httpx
import pytest
from rich.console import Console

import importlib
import settings
from cli.main import build_parser, main, resolve_credentials
from config.loader import PLACEHOLDER
from mic import ConfigurationError
from tests.conftest import (
    APP_ID,
    APP_SECRET,
    AUTH_URL,
    CHECK_URL,
    REDIRECT_URI,
    TEMP_LOGIN_URI,
    TOKEN_URL,
    USER_URL,
)


@pytest.fixture
def output(monkeypatch) -> io.StringIO:
    """Capture CLI console output and leave logging configuration alone."""
    buffer = io.StringIO()
    monkeypatch.setattr(
        importlib.import_module("cli.main"),
        "setup_debug_console",
        lambda debug: Console(file=buffer, width=200, force_terminal=False),
    )
    return buffer


@pytest.fixture
def app_settings(monkeypatch):
    monkeypatch.setattr(settings, "KINVEY_APP_ID", APP_ID)
    monkeypatch.setattr(settings, "KINVEY_APP_SECRET", APP_SECRET)
    monkeypatch.setattr(settings, "KINVEY_REDIRECT_URI", REDIRECT_URI)
    monkeypatch.setattr(settings, "KINVEY_AUTH_INSTANCE", "auth")
    monkeypatch.setattr(settings, "KINVEY_DATA_INSTANCE", "baas")
    monkeypatch.setattr(settings, "KINVEY_SESSION_EXCHANGE", False)
    monkeypatch.setattr(settings, "MIC_REQUEST_TIMEOUT", 5.0)


@pytest.fixture
def happy_routes(mock_router):
    mock_router.post(AUTH_URL).mock(
        return_value=httpx.Response(200, json={"temp_login_uri": TEMP_LOGIN_URI})
    )
    mock_router.post(TEMP_LOGIN_URI).mock(
        return_value=httpx.Response(302, headers={"Location": "https://app/cb?code=XYZ"})
    )
    mock_router.post(TOKEN_URL).mock(
        return_value=httpx.Response(200, json={"token_type": "bearer", "access_token": "tok123"})
    )
    return {
        "check": mock_router.post(CHECK_URL).mock(
            return_value=httpx.Response(200, json={"usernameExists": False})
        ),
        "create": mock_router.post(USER_URL).mock(
            return_value=httpx.Response(201, json={"_kmd": {"authtoken": "sess456"}})
        ),
    }


class TestResolveCredentials:

    def test_arguments_win(self, monkeypatch):
        monkeypatch.setenv("USERNAME", "env-user")
        monkeypatch.setenv("PASSWORD", "env-pass")

        credentials = resolve_credentials("alice", "secret")

        assert credentials.username == "alice"
        assert credentials.password == "secret"

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("USERNAME", "env-user")
        monkeypatch.setenv("PASSWORD", "env-pass")

        credentials = resolve_credentials(None, None)

        assert credentials.username == "env-user"
        assert credentials.password == "env-pass"

    def test_missing_password(self, monkeypatch):
        monkeypatch.delenv("PASSWORD", raising=False)

        with pytest.raises(ConfigurationError, match="password"):
            resolve_credentials("alice", None)

    def test_password_not_in_repr(self):
        assert "secret" not in repr(resolve_credentials("alice", "secret"))


def test_parser_session_flag():
    parser = build_parser()

    assert parser.parse_args(["alice", "secret"]).session is None
    assert parser.parse_args(["alice", "secret", "--session"]).session is True
    assert parser.parse_args(["alice", "secret", "--no-session"]).session is False


def test_main_prints_tokens_only_by_default(output, app_settings, happy_routes):
    main(["alice", "secret"])

    text = output.getvalue()
    assert "Mobile Identity Connect auth completed successfully" in text
    assert "tok123" in text
    assert "Session token" not in text
    assert not happy_routes["check"].called


def test_main_with_session_prints_curl_command(output, app_settings, happy_routes):
    main(["alice", "secret", "--session"])

    text = output.getvalue()
    assert "Step 4:" in text
    assert "Kinvey Session token for user alice is sess456" in text
    assert (
        "curl -X GET -H 'Authorization: Kinvey sess456' "
        f"https://baas.kinvey.com/appdata/{APP_ID}/"
    ) in text
    assert happy_routes["create"].called


def test_main_session_default_from_settings(output, app_settings, happy_routes, monkeypatch):
    monkeypatch.setattr(settings, "KINVEY_SESSION_EXCHANGE", True)

    main(["alice", "secret"])

    assert happy_routes["check"].called


def test_main_reports_protocol_error_and_exits(output, app_settings, mock_router):
    mock_router.post(AUTH_URL).mock(
        return_value=httpx.Response(
            400,
            json={"error": "invalid_client", "description": "Unknown client"},
            headers={"X-Kinveyauth-Request-Id": "req-9"},
        )
    )
    grant = mock_router.post(TEMP_LOGIN_URI).mock(return_value=httpx.Response(302))

    with pytest.raises(SystemExit) as exc_info:
        main(["alice", "secret"])

    assert exc_info.value.code == 1
    assert not grant.called
    text = output.getvalue()
    assert "!!! Error obtaining temp login URI:" in text
    assert "400" in text
    assert "req-9" in text
    assert "invalid_client" in text
    assert "Unknown client" in text


def test_main_rejects_placeholder_settings(output, monkeypatch, mock_router):
    monkeypatch.setattr(settings, "KINVEY_APP_ID", PLACEHOLDER)
    monkeypatch.setattr(settings, "KINVEY_APP_SECRET", APP_SECRET)
    monkeypatch.setattr(settings, "KINVEY_REDIRECT_URI", REDIRECT_URI)

    with pytest.raises(SystemExit) as exc_info:
        main(["alice", "secret"])

    assert exc_info.value.code == 1
    assert "Kinvey App ID" in output.getvalue()
    assert not mock_router.calls


def test_main_overrides_settings_from_arguments(output, app_settings, mock_router):
    route = mock_router.post("https://vmwus1-auth.kinvey.com/oauth/auth").mock(
        return_value=httpx.Response(500, text="down")
    )

    with pytest.raises(SystemExit):
        main(["alice", "secret", "--auth-instance", "vmwus1-auth", "--app-id", "kid_other"])

    assert route.called
    assert b"client_id=kid_other" in route.calls.last.request.content


def test_main_missing_username(output, app_settings, monkeypatch, mock_router):
    monkeypatch.delenv("USERNAME", raising=False)
    monkeypatch.delenv("PASSWORD", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 1
    assert "Invalid username" in output.getvalue()
