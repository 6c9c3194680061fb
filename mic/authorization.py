"""Step 1: request a temporary login URI from MIC"""

import logging

from .config import MICConfig
from .responses import build_protocol_error, post, safe_json

logger = logging.getLogger(__name__)

STAGE = "obtaining temp login URI"


async def request_temp_login_uri(config: MICConfig) -> str:
    """Request the temporary auth URI used to submit credentials

    Args:
        config: Application configuration

    Returns:
        The single-use login URI

    Raises:
        TransportError: If the request could not be sent
        ProtocolError: If the response has no temp_login_uri
    """
    response = await post(
        f"{config.auth_url_root}auth",
        STAGE,
        config.timeout,
        data={
            "client_id": config.app_id,
            "redirect_uri": config.redirect_uri,
            "response_type": "code",
        },
    )

    temp_login_uri = safe_json(response).get("temp_login_uri")
    if not temp_login_uri:
        raise build_protocol_error(response, STAGE)

    logger.info("Obtained temporary login URI")
    return temp_login_uri
