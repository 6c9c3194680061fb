"""Sequential MIC login flow with optional Kinvey session exchange"""

import asyncio
import logging
from typing import Callable, Optional

from kcs import session as kcs_session
from .authorization import request_temp_login_uri
from .config import MICConfig
from .grant import request_auth_grant
from .models import AuthResult, Credentials, TokenSet
from .token_exchange import request_tokens

logger = logging.getLogger(__name__)

# Called with (step number, description) before each step starts
StepCallback = Callable[[int, str], None]

STEPS = {
    1: "Requesting temporary login URI",
    2: "Requesting authorization grant",
    3: "Exchanging grant for tokens",
    4: "Exchanging MIC access token for Kinvey session token",
}


class MICAuthFlow:
    """Runs the resource owner password flow against Kinvey MIC

    Each step consumes the previous step's artifact exactly once:
    1. temp login URI from /oauth/auth
    2. authorization code from the temp URI redirect
    3. token set from /oauth/token
    4. (optional) Kinvey session token via login or user creation

    Any failure raises immediately and no later step is attempted.
    """

    def __init__(self, config: MICConfig, on_step: Optional[StepCallback] = None):
        self.config = config.validate()
        self.on_step = on_step

    def _step(self, number: int):
        logger.debug(f"Step {number}: {STEPS[number]}")
        if self.on_step:
            self.on_step(number, STEPS[number])

    async def authenticate(self, credentials: Credentials) -> TokenSet:
        """Run steps 1-3 and return the MIC token set"""
        logger.info(f"Starting MIC authentication for {credentials.username}")

        self._step(1)
        temp_login_uri = await request_temp_login_uri(self.config)
        self._step(2)
        code = await request_auth_grant(self.config, temp_login_uri, credentials)
        self._step(3)
        tokens = await request_tokens(self.config, code)

        logger.info("Mobile Identity Connect auth completed successfully")
        return tokens

    async def run(self, credentials: Credentials, exchange_session: bool = False) -> AuthResult:
        """Run the full flow

        Args:
            credentials: The user's username and password
            exchange_session: Also exchange the access token for a Kinvey
                session token

        Returns:
            AuthResult with the token set and, if requested, the session
        """
        tokens = await self.authenticate(credentials)
        if not exchange_session:
            return AuthResult(tokens=tokens)

        self._step(4)
        session = await kcs_session.exchange_for_session(self.config, credentials.username, tokens)
        logger.info(f"Kinvey session established for {session.username}")
        return AuthResult(tokens=tokens, session=session)

    def run_sync(self, credentials: Credentials, exchange_session: bool = False) -> AuthResult:
        """Synchronous version of run

        Must not be called from inside a running event loop.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.run(credentials, exchange_session))
        raise RuntimeError("run_sync() cannot be used inside a running event loop; await run() instead")
