"""Immutable configuration for the MIC login flow"""

from dataclasses import dataclass, fields, replace

import settings
from config.loader import PLACEHOLDER
from .errors import ConfigurationError


@dataclass(frozen=True)
class MICConfig:
    """Application identity and service locations

    Attributes:
        app_id: App ID from the Kinvey Console
        app_secret: App Secret, sent as the Basic auth password
        redirect_uri: Redirect URI registered for the app
        auth_instance: Host prefix of the MIC auth service
        data_instance: Host prefix of the Kinvey data service
        identity_provider: Key under _socialIdentity for the MIC token
        timeout: Per-request timeout in seconds
    """
    app_id: str
    app_secret: str
    redirect_uri: str
    auth_instance: str = "auth"
    data_instance: str = "baas"
    identity_provider: str = "kinveyAuth"
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, **overrides) -> "MICConfig":
        """Build from settings.py, letting non-None overrides win"""
        config = cls(
            app_id=settings.KINVEY_APP_ID,
            app_secret=settings.KINVEY_APP_SECRET,
            redirect_uri=settings.KINVEY_REDIRECT_URI,
            auth_instance=settings.KINVEY_AUTH_INSTANCE,
            data_instance=settings.KINVEY_DATA_INSTANCE,
            identity_provider=settings.KINVEY_IDENTITY_PROVIDER,
            timeout=float(settings.MIC_REQUEST_TIMEOUT),
        )
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown MICConfig fields: {sorted(unknown)}")
        return replace(config, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> "MICConfig":
        """Reject values that were never filled in

        Raises:
            ConfigurationError: Naming every setting that is empty or still
                the placeholder
        """
        required = {
            "app_id": "Kinvey App ID",
            "app_secret": "Kinvey App Secret",
            "redirect_uri": "Redirect URI",
            "auth_instance": "Auth instance name",
            "data_instance": "Data instance name",
        }
        missing = [
            label for name, label in required.items()
            if not getattr(self, name) or getattr(self, name) == PLACEHOLDER
        ]
        if missing:
            raise ConfigurationError(
                f"Set these to your app specific values before running: {', '.join(missing)}"
            )
        if self.timeout <= 0:
            raise ConfigurationError(f"Request timeout must be positive, got {self.timeout}")
        return self

    @property
    def auth_url_root(self) -> str:
        return f"https://{self.auth_instance}.kinvey.com/oauth/"

    @property
    def user_url_root(self) -> str:
        return f"https://{self.data_instance}.kinvey.com/user/{self.app_id}/"

    @property
    def rpc_url_root(self) -> str:
        return f"https://{self.data_instance}.kinvey.com/rpc/{self.app_id}/"

    @property
    def data_url_root(self) -> str:
        return f"https://{self.data_instance}.kinvey.com/appdata/{self.app_id}/"

    @property
    def basic_auth(self) -> tuple[str, str]:
        return (self.app_id, self.app_secret)

    def __repr__(self) -> str:
        return (
            f"MICConfig(app_id={self.app_id!r}, app_secret='***', "
            f"redirect_uri={self.redirect_uri!r}, auth_instance={self.auth_instance!r}, "
            f"data_instance={self.data_instance!r})"
        )
