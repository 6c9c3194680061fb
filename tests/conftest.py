"""
Shared test configuration and fixtures.
"""

import base64
from urllib.parse import parse_qs

import pytest
import respx

from mic import Credentials, MICConfig

APP_ID = "kid_test"
APP_SECRET = "app-secret-123"
REDIRECT_URI = "https://app/cb"

AUTH_URL = "https://auth.kinvey.com/oauth/auth"
TOKEN_URL = "https://auth.kinvey.com/oauth/token"
TEMP_LOGIN_URI = "https://idp/tmp/abc"
CHECK_URL = f"https://baas.kinvey.com/rpc/{APP_ID}/check-username-exists"
USER_URL = f"https://baas.kinvey.com/user/{APP_ID}/"
LOGIN_URL = f"https://baas.kinvey.com/user/{APP_ID}/login"


@pytest.fixture
def mic_config() -> MICConfig:
    """MICConfig with filled-in test values and a short timeout."""
    return MICConfig(
        app_id=APP_ID,
        app_secret=APP_SECRET,
        redirect_uri=REDIRECT_URI,
        timeout=5.0,
    )


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="alice", password="secret")


@pytest.fixture
def mock_router():
    """
    respx router that fails on unmocked requests but does not require
    every route to be called, so tests can assert a route was skipped.
    """
    with respx.mock(assert_all_called=False, assert_all_mocked=True) as router:
        yield router


def form_body(request) -> dict:
    """Decode a form-encoded request body into a flat dict."""
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def basic_auth_header(user: str = APP_ID, password: str = APP_SECRET) -> str:
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return f"Basic {token}"
