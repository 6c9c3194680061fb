"""Configuration loader for the Kinvey MIC login tool

Loads configuration from multiple sources with the following priority:
1. Environment variables (highest priority)
2. .env file
3. Hardcoded defaults (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from dotenv import load_dotenv

# Set up logger for config loader
logger = logging.getLogger(__name__)

# Values that have not been filled in by the user
PLACEHOLDER = "Set this to your app specific value before running."


class ConfigLoader:
    """Handles loading configuration from various sources"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Optional path to .env file.
                     Defaults to '.env' in the current directory.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._load_env_file()

    def _load_env_file(self):
        """Load environment variables from .env file if it exists"""
        if self.env_path.exists():
            # Real environment variables win over the file
            load_dotenv(dotenv_path=self.env_path, override=False)
            logger.debug(f"Loaded environment variables from {self.env_path}")
        else:
            logger.debug(f".env file not found at {self.env_path}, using environment variables and defaults only")

    def get(self, env_var: str, default: Any) -> Any:
        """Get a configuration value with priority: env > default

        Empty environment values are treated as unset so that a blank
        line in .env does not silently clear a required setting.

        Args:
            env_var: Environment variable name to check
            default: Default value if not found in environment

        Returns:
            The configuration value from environment or default, coerced to
            the type of the default for bool, int and float settings
        """
        env_value = os.getenv(env_var)
        if env_value is None or env_value.strip() == "":
            return default

        env_value = env_value.strip()
        if isinstance(default, bool):
            return env_value.lower() in ('true', '1', 'yes', 'on')
        if isinstance(default, int):
            try:
                return int(env_value)
            except ValueError:
                logger.warning(f"Failed to parse {env_var}={env_value} as int, using default: {default}")
                return default
        if isinstance(default, float):
            try:
                return float(env_value)
            except ValueError:
                logger.warning(f"Failed to parse {env_var}={env_value} as float, using default: {default}")
                return default
        return env_value

    def get_required(self, env_var: str) -> str:
        """Get a string setting that must be supplied by the user

        Returns the placeholder when the variable is unset, so that
        validation can report exactly which value still needs filling in.
        """
        return self.get(env_var, PLACEHOLDER)


# Create a global instance
_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def reset_config_loader() -> None:
    """Drop the global ConfigLoader so the next access re-reads .env"""
    global _config_loader
    _config_loader = None
