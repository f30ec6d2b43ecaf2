"""
Module: logger.py
Description: Structured logging configuration for the HTTP output engine.

Configures structlog for JSON output so delivery outcomes can be
consumed by the same log pipeline the engine ships to.

Key Components:
- configure_logging(): install processors and the level filter
- get_logger(): module logger helper

Dependencies: structlog, logging
"""

import logging

import structlog
from structlog.typing import FilteringBoundLogger


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog for JSON output.

    Args:
        log_level: Minimum level name to emit (DEBUG, INFO, ...)
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        cache_logger_on_first_use=False,
    )


configure_logging()


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Endpoint rejected chunk", status_code=403)
        {"status_code": 403, "event": "Endpoint rejected chunk", "timestamp": "...", "level": "warning"}
    """
    return structlog.get_logger(name)
