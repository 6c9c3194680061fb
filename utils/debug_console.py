"""Debug console module for capturing Rich console output to log files.

This module provides a custom Rich Console implementation that transparently
captures all console output to a debug log file when debug mode is enabled.
Secrets registered with the console are masked in the captured copy.
"""

import logging
import io
import re
from typing import Iterable, Optional
from rich.console import Console as RichConsole

ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')
REDACTED = "[REDACTED]"


class DebugCapturingConsole(RichConsole):
    """
    Custom Rich Console that captures all output to a debug log file.

    The terminal keeps the full, formatted output. The log receives a plain
    text copy with every registered secret replaced by [REDACTED].
    """

    def __init__(self, debug_logger: Optional[logging.Logger] = None, *args, **kwargs):
        """
        Initialize the debug capturing console.

        Args:
            debug_logger: Logger instance to write captured output to
            *args, **kwargs: Arguments passed to Rich Console
        """
        super().__init__(*args, **kwargs)
        self.debug_logger = debug_logger
        self._log_prefix = "[CONSOLE] "
        self._secrets: set[str] = set()

    def add_secrets(self, secrets: Iterable[Optional[str]]):
        """Register values that must never reach the debug log"""
        self._secrets.update(s for s in secrets if s)

    def print(self, *objects, **kwargs):
        """
        Print to the terminal, then log a redacted plain text copy.
        """
        super().print(*objects, **kwargs)

        if self.debug_logger and self.debug_logger.isEnabledFor(logging.DEBUG):
            plain_text = self.redact(self._render_to_plain_text(*objects, **kwargs))
            if plain_text.strip():
                self.debug_logger.debug(f"{self._log_prefix}{plain_text}")

    def redact(self, text: str) -> str:
        # Longest first so a secret containing another is fully masked
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, REDACTED)
        return text

    def _render_to_plain_text(self, *objects, **kwargs) -> str:
        """
        Render the objects to plain text without Rich markup.

        Args:
            *objects: Objects to render
            **kwargs: Keyword arguments from print call

        Returns:
            Plain text string without Rich formatting
        """
        string_buffer = io.StringIO()

        temp_console = RichConsole(
            file=string_buffer,
            force_terminal=False,
            width=self.width,
            legacy_windows=False
        )
        # No wrapping, so a long secret stays on one line for redact()
        temp_console.print(*objects, **{**kwargs, "soft_wrap": True})

        return ANSI_ESCAPE.sub('', string_buffer.getvalue()).rstrip()


def create_debug_console(debug_enabled: bool = False,
                        debug_logger: Optional[logging.Logger] = None) -> RichConsole:
    """
    Create appropriate console instance based on debug mode.

    Args:
        debug_enabled: Whether debug mode is enabled
        debug_logger: Logger instance for debug output

    Returns:
        DebugCapturingConsole if debug enabled, regular Console otherwise
    """
    if debug_enabled and debug_logger:
        return DebugCapturingConsole(debug_logger=debug_logger)
    return RichConsole()


def setup_debug_logger(log_file: Optional[str] = None,
                       handler: Optional[logging.Handler] = None) -> logging.Logger:
    """
    Set up a dedicated logger for debug console output.

    Pass the root logger's file handler as `handler` so both loggers write
    through one stream and their lines stay in order.

    Args:
        log_file: Path to debug log file, used when no handler is given
        handler: Existing handler to write through

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("debug_console")
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    for existing in logger.handlers[:]:
        logger.removeHandler(existing)

    if handler is None:
        if not log_file:
            raise ValueError("setup_debug_logger needs a log_file or a handler")
        handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
    logger.addHandler(handler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger
