"""Structured logging for the launchdeck CLI.

This module provides:
- structlog configuration for console or JSON logging to stderr
- Structured log events for snapshot load/save and app launches

Library modules log through the standard ``logging`` module; the
``basicConfig`` call here routes those records to stderr at the same level.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

    from launchdeck.state.models import AppEntry, LauncherState


def configure_logging(
    verbose: bool = False,
    json_output: bool = False,
) -> None:
    """Configure structured logging for the application.

    Sets up structlog writing to stderr, including:
    - Timestamp in ISO format
    - Log level
    - Exception formatting

    Args:
        verbose: If True, enable DEBUG level. Otherwise WARNING.
        json_output: If True, output JSON. Otherwise use console format.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    processors: list[Callable[..., Any]] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        Bound structlog logger
    """
    return structlog.get_logger(name)


def log_state_loaded(state: LauncherState | None, db_path: str) -> None:
    """Log the outcome of a snapshot load."""
    log = get_logger("launchdeck.state")
    if state is None:
        log.info("state_loaded", db_path=db_path, first_run=True)
        return
    log.info(
        "state_loaded",
        db_path=db_path,
        first_run=False,
        groups=len(state.groups),
        apps=sum(len(g.apps) for g in state.groups),
        active_group_id=state.active_group_id,
    )


def log_state_saved(state: LauncherState, db_path: str, reason: str) -> None:
    """Log a successful snapshot save.

    Args:
        state: Snapshot that was persisted
        db_path: Database file it was written to
        reason: Short name of the edit that triggered the save
    """
    log = get_logger("launchdeck.state")
    log.info(
        "state_saved",
        db_path=db_path,
        reason=reason,
        groups=len(state.groups),
        apps=sum(len(g.apps) for g in state.groups),
        active_group_id=state.active_group_id,
    )


def log_app_launched(entry: AppEntry, error: str | None = None) -> None:
    """Log an app launch attempt."""
    log = get_logger("launchdeck.launcher")
    log_func = log.info if error is None else log.warning
    log_func(
        "app_launched",
        app_id=entry.id,
        name=entry.name,
        path=entry.path,
        has_args=entry.args is not None,
        result="success" if error is None else "failed",
        error=error,
    )
