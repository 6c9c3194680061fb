"""Step 3: exchange the authorization code for MIC tokens"""

import logging

from .config import MICConfig
from .models import TokenSet
from .responses import build_protocol_error, post, safe_json

logger = logging.getLogger(__name__)

STAGE = "requesting OAuth token"


async def request_tokens(config: MICConfig, code: str) -> TokenSet:
    """Request the access token and refresh token (if enabled)

    Refresh tokens are only returned when they have been configured
    for the app in the console.

    Args:
        config: Application configuration
        code: Authorization code from request_auth_grant

    Returns:
        TokenSet built from the token endpoint response

    Raises:
        TransportError: If the request could not be sent
        ProtocolError: If the response has no token_type or access_token
    """
    response = await post(
        f"{config.auth_url_root}token",
        STAGE,
        config.timeout,
        auth=config.basic_auth,
        data={
            "client_id": config.app_id,
            "redirect_uri": config.redirect_uri,
            "grant_type": "authorization_code",
            "code": code,
        },
    )

    payload = safe_json(response)
    if not payload.get("token_type") or not payload.get("access_token"):
        raise build_protocol_error(response, STAGE)

    tokens = TokenSet.from_response(payload)
    logger.info(f"Obtained MIC tokens (type={tokens.token_type}, refresh={'yes' if tokens.refresh_token else 'no'})")
    return tokens
