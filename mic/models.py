"""Data models for the MIC login flow"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from kcs.models import KinveySession


@dataclass
class Credentials:
    """End-user credentials, held in memory for one flow only

    Attributes:
        username: Login name at the identity provider
        password: Password, excluded from repr
    """
    username: str
    password: str = field(repr=False)


@dataclass
class TokenSet:
    """Tokens returned by the MIC token endpoint

    Attributes:
        access_token: Bearer token issued by MIC
        token_type: Token type, normally "bearer"
        refresh_token: Present only when refresh tokens are enabled for the app
        expires_in: Lifetime of the access token in seconds, if reported
        raw: Full parsed response body
    """
    access_token: str
    token_type: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "TokenSet":
        return cls(
            access_token=payload["access_token"],
            token_type=payload["token_type"],
            refresh_token=payload.get("refresh_token"),
            expires_in=payload.get("expires_in"),
            raw=dict(payload),
        )


@dataclass
class AuthResult:
    """Outcome of a complete run

    Attributes:
        tokens: MIC token set
        session: Kinvey session, only when the session exchange ran
    """
    tokens: TokenSet
    session: Optional["KinveySession"] = None
