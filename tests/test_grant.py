"""
Unit tests for step 2, requesting the authorization grant.
"""

import httpx
import pytest

from mic import ProtocolError, TransportError
from mic.grant import extract_authorization_code, request_auth_grant
from tests.conftest import APP_ID, REDIRECT_URI, TEMP_LOGIN_URI, basic_auth_header, form_body


class TestExtractAuthorizationCode:
    """Tests for reading the code out of the redirect location."""

    def test_code_as_last_parameter(self):
        assert extract_authorization_code("https://host/cb?foo=1&code=ABC123") == "ABC123"

    def test_code_only_parameter(self):
        assert extract_authorization_code("https://app/cb?code=XYZ") == "XYZ"

    def test_code_followed_by_other_parameters(self):
        """
        The code is read by name, so later parameters do not leak into it.
        """
        assert extract_authorization_code("https://app/cb?code=XYZ&state=a=b") == "XYZ"

    def test_url_encoded_code(self):
        assert extract_authorization_code("https://app/cb?code=a%2Bb%3D") == "a+b="

    def test_missing_code(self):
        assert extract_authorization_code("https://app/cb?error=access_denied") is None

    def test_no_query(self):
        assert extract_authorization_code("https://app/cb") is None


@pytest.mark.asyncio
async def test_request_auth_grant_success(mock_router, mic_config, credentials):
    """
    The redirect's code is returned, and the request carries the user's
    credentials under application Basic auth.
    """
    route = mock_router.post(TEMP_LOGIN_URI).mock(
        return_value=httpx.Response(302, headers={"Location": "https://app/cb?code=XYZ"})
    )

    code = await request_auth_grant(mic_config, TEMP_LOGIN_URI, credentials)

    assert code == "XYZ"
    request = route.calls.last.request
    assert request.headers["authorization"] == basic_auth_header()
    assert form_body(request) == {
        "client_id": APP_ID,
        "redirect_uri": REDIRECT_URI,
        "response_type": "code",
        "username": "alice",
        "password": "secret",
    }


@pytest.mark.asyncio
async def test_request_auth_grant_does_not_follow_redirect(mock_router, mic_config, credentials):
    """
    The redirect target itself is never requested.
    """
    mock_router.post(TEMP_LOGIN_URI).mock(
        return_value=httpx.Response(302, headers={"Location": "https://app/cb?code=XYZ"})
    )
    callback = mock_router.route(host="app").mock(return_value=httpx.Response(200))

    await request_auth_grant(mic_config, TEMP_LOGIN_URI, credentials)

    assert not callback.called


@pytest.mark.asyncio
async def test_request_auth_grant_invalid_credentials(mock_router, mic_config, credentials):
    """
    No Location header means the credentials were rejected.
    """
    mock_router.post(TEMP_LOGIN_URI).mock(
        return_value=httpx.Response(
            401,
            json={"error": "access_denied", "description": "Invalid credentials"},
            headers={"X-Kinvey-Request-Id": "req-2"},
        )
    )

    with pytest.raises(ProtocolError) as exc_info:
        await request_auth_grant(mic_config, TEMP_LOGIN_URI, credentials)

    error = exc_info.value
    assert error.stage == "requesting auth grant"
    assert error.status_code == 401
    assert error.message == "access_denied"
    assert error.request_id == "req-2"


@pytest.mark.asyncio
async def test_request_auth_grant_location_without_code(mock_router, mic_config, credentials):
    mock_router.post(TEMP_LOGIN_URI).mock(
        return_value=httpx.Response(302, headers={"Location": "https://app/cb?error=access_denied"})
    )

    with pytest.raises(ProtocolError) as exc_info:
        await request_auth_grant(mic_config, TEMP_LOGIN_URI, credentials)

    assert exc_info.value.status_code == 302


@pytest.mark.asyncio
async def test_request_auth_grant_network_error(mock_router, mic_config, credentials):
    mock_router.post(TEMP_LOGIN_URI).mock(side_effect=httpx.ConnectError("Connection reset"))

    with pytest.raises(TransportError, match="requesting auth grant"):
        await request_auth_grant(mic_config, TEMP_LOGIN_URI, credentials)
