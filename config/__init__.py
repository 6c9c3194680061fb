"""Configuration management package for kinvey-mic-login"""

from .loader import PLACEHOLDER, ConfigLoader, get_config_loader, reset_config_loader

__all__ = [
    "PLACEHOLDER",
    "ConfigLoader",
    "get_config_loader",
    "reset_config_loader",
]
