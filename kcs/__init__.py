"""Kinvey backend (KCS) session exchange

Binds a MIC access token to a Kinvey user record through the
kinveyAuth social identity and returns a Kinvey session token.
"""

from .models import KinveySession
from .session import check_username_exists, exchange_for_session, login_or_register

__all__ = [
    "KinveySession",
    "check_username_exists",
    "exchange_for_session",
    "login_or_register",
]
