"""Logging and debug console setup for CLI"""

import logging
import os
from typing import Optional

from rich.console import Console

import settings
from utils.debug_console import create_debug_console, setup_debug_logger

logger = logging.getLogger(__name__)


def setup_logging(debug: bool, log_file: Optional[str] = None) -> Optional[logging.Logger]:
    """
    Configure the root logger

    In debug mode everything is logged at DEBUG to both stderr and the
    debug log file (appended), and a dedicated logger is returned for
    capturing console output. Otherwise logging goes to stderr at LOG_LEVEL.

    Args:
        debug: Whether debug mode is enabled
        log_file: Debug log path, defaults to settings.DEBUG_LOG_FILE

    Returns:
        The console capture logger in debug mode, None otherwise
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if not debug:
        level = getattr(logging, str(settings.LOG_LEVEL).upper(), logging.WARNING)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
        root_logger.setLevel(level)
        return None

    root_logger.setLevel(logging.DEBUG)

    log_file = os.path.abspath(log_file or settings.DEBUG_LOG_FILE)
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Request lines are logged by mic.responses already
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info(f"Debug logging enabled - appending to {log_file}")
    return setup_debug_logger(handler=file_handler)


def setup_debug_console(debug: bool, log_file: Optional[str] = None) -> Console:
    """
    Setup logging and return the console for CLI output

    Args:
        debug: Whether debug mode is enabled
        log_file: Debug log path, defaults to settings.DEBUG_LOG_FILE

    Returns:
        Console instance (either regular or debug-enabled)
    """
    debug_logger = setup_logging(debug, log_file)
    console = create_debug_console(debug_enabled=debug, debug_logger=debug_logger)

    if debug_logger:
        debug_logger.debug("[CLI] ===== MIC LOGIN SESSION STARTED =====")

    return console
