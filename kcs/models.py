"""Data models for Kinvey backend sessions"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class KinveySession:
    """Kinvey user session bound to a MIC identity

    Attributes:
        username: Kinvey username
        authtoken: Session token from _kmd.authtoken
        user_existed: True if the user logged in, False if it was created
        raw: Full user entity returned by Kinvey
    """
    username: str
    authtoken: str
    user_existed: bool
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def authorization_header(self) -> str:
        return f"Kinvey {self.authtoken}"

    def curl_command(self, url: str) -> str:
        """cURL command that makes a request as this user"""
        return f"curl -X GET -H 'Authorization: {self.authorization_header}' {url}"
