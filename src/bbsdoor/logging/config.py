# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Centralized logging configuration for bbsdoor.

This module provides structured logging using structlog, configured to:
- Write all logs to stderr (stdout may be the caller's terminal in stdio mode)
- Respect BBSDOOR_LOG_LEVEL environment variable (default: WARNING)
- Use ISO timestamps and console rendering
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from bbsdoor.settings import Settings

__all__ = ["get_logger", "configure_logging"]


def configure_logging(settings: Settings | None = None, *, verbose: bool = False) -> None:
    """Configure structlog for bbsdoor.

    This should be called once at process startup, before the drop file is
    read, so bootstrap failures always reach the operator.

    Args:
        settings: Settings instance (will be created if None)
        verbose: Force DEBUG level regardless of settings
    """
    if settings is None:
        from bbsdoor.settings import Settings

        settings = Settings()

    log_level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)

    # Never write to stdout: in stdio mode it is the caller's screen
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
