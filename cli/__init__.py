"""CLI package for the Kinvey MIC login tool

This package provides the command-line interface that runs the
MIC login flow and prints the resulting tokens.
"""

from cli.login_app import MICLoginCLI
from cli.main import main

__all__ = [
    "MICLoginCLI",
    "main",
]
