"""Kinvey Mobile Identity Connect (MIC) login package

Implements the resource owner password credentials exchange:
temp login URI -> authorization grant -> token set, with an optional
final exchange of the access token for a Kinvey session token.
"""

from .config import MICConfig
from .errors import ConfigurationError, MICError, ProtocolError, TransportError
from .models import AuthResult, Credentials, TokenSet
from .authorization import request_temp_login_uri
from .grant import extract_authorization_code, request_auth_grant
from .token_exchange import request_tokens
from .flow import MICAuthFlow

__all__ = [
    "MICConfig",
    "MICError",
    "ConfigurationError",
    "ProtocolError",
    "TransportError",
    "AuthResult",
    "Credentials",
    "TokenSet",
    "request_temp_login_uri",
    "extract_authorization_code",
    "request_auth_grant",
    "request_tokens",
    "MICAuthFlow",
]
