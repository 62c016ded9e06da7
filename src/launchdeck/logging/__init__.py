"""Logging module for launchdeck.

This module provides structured logging with:
- structlog configuration for consistent log formatting
- Structured log events for snapshot load/save and app launches

Usage:
    from launchdeck.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger("launchdeck.cli")
"""

from launchdeck.logging.structured import (
    configure_logging,
    get_logger,
    log_app_launched,
    log_state_loaded,
    log_state_saved,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_app_launched",
    "log_state_loaded",
    "log_state_saved",
]
