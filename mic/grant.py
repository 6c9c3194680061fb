"""Step 2: submit user credentials and collect the authorization code"""

import logging
from typing import Optional
from urllib.parse import parse_qs, urlparse

from .config import MICConfig
from .models import Credentials
from .responses import build_protocol_error, post

logger = logging.getLogger(__name__)

STAGE = "requesting auth grant"


def extract_authorization_code(location: str) -> Optional[str]:
    """Read the ``code`` query parameter from a redirect location

    Args:
        location: Value of the Location header, <redirect uri>?code=<grant>

    Returns:
        The authorization code, or None if the URI carries no code
    """
    params = parse_qs(urlparse(location).query)
    codes = params.get("code")
    return codes[0] if codes else None


async def request_auth_grant(
    config: MICConfig,
    temp_login_uri: str,
    credentials: Credentials
) -> str:
    """Authenticate the user against the temp URI and obtain a grant

    The grant is short lived and can be exchanged for tokens once.

    Args:
        config: Application configuration
        temp_login_uri: URI returned by request_temp_login_uri
        credentials: The user's username and password

    Returns:
        The authorization code

    Raises:
        TransportError: If the request could not be sent
        ProtocolError: If MIC did not redirect with a code
    """
    response = await post(
        temp_login_uri,
        STAGE,
        config.timeout,
        auth=config.basic_auth,
        data={
            "client_id": config.app_id,
            "redirect_uri": config.redirect_uri,
            "response_type": "code",
            "username": credentials.username,
            "password": credentials.password,
        },
    )

    location = response.headers.get("location")
    if not location:
        raise build_protocol_error(response, STAGE)

    code = extract_authorization_code(location)
    if not code:
        logger.debug(f"Redirect without code: {location}")
        raise build_protocol_error(response, STAGE)

    logger.info(f"Obtained authorization grant for {credentials.username}")
    return code
