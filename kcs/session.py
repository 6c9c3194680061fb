"""Exchange a MIC access token for a Kinvey session token"""

import logging

from mic.config import MICConfig
from mic.models import TokenSet
from mic.responses import build_protocol_error, post, safe_json
from .models import KinveySession

logger = logging.getLogger(__name__)

CHECK_STAGE = "checking username existence"
AUTH_STAGE = "creating the user or logging in"


async def check_username_exists(config: MICConfig, username: str) -> bool:
    """Check whether the given username exists in this app

    Args:
        config: Application configuration
        username: Kinvey username to look up

    Returns:
        True if the user exists, False if it does not

    Raises:
        TransportError: If the request could not be sent
        ProtocolError: If the response has no usernameExists value
    """
    response = await post(
        f"{config.rpc_url_root}check-username-exists",
        CHECK_STAGE,
        config.timeout,
        auth=config.basic_auth,
        json={"username": username},
    )

    # false is a meaningful answer, only a missing or null value is an error
    exists = safe_json(response).get("usernameExists")
    if exists is None:
        raise build_protocol_error(response, CHECK_STAGE)

    return bool(exists)


async def login_or_register(
    config: MICConfig,
    username: str,
    tokens: TokenSet,
    user_exists: bool
) -> KinveySession:
    """Log in as an existing user or create the user with a social identity

    Args:
        config: Application configuration
        username: Kinvey username
        tokens: MIC tokens; the access token becomes the social identity
        user_exists: Result of check_username_exists

    Returns:
        KinveySession holding the session token

    Raises:
        TransportError: If the request could not be sent
        ProtocolError: If the response has no _kmd.authtoken
    """
    if user_exists:
        logger.info(f"User {username} exists, logging in...")
        url = f"{config.user_url_root}login"
    else:
        logger.info(f"User {username} does not exist, creating...")
        url = config.user_url_root

    response = await post(
        url,
        AUTH_STAGE,
        config.timeout,
        auth=config.basic_auth,
        json={
            "username": username,
            "_socialIdentity": {
                config.identity_provider: {
                    "access_token": tokens.access_token,
                }
            },
        },
    )

    payload = safe_json(response)
    kmd = payload.get("_kmd")
    authtoken = kmd.get("authtoken") if isinstance(kmd, dict) else None
    if not authtoken:
        raise build_protocol_error(response, AUTH_STAGE)

    return KinveySession(
        username=username,
        authtoken=authtoken,
        user_existed=user_exists,
        raw=payload,
    )


async def exchange_for_session(
    config: MICConfig,
    username: str,
    tokens: TokenSet
) -> KinveySession:
    """Authenticate against KCS with the username and MIC tokens

    Existing users are logged in, new users are created with the MIC
    access token as their kinveyAuth social identity.
    """
    user_exists = await check_username_exists(config, username)
    return await login_or_register(config, username, tokens, user_exists)
