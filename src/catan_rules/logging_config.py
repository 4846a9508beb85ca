"""
Structured logging configuration for the rules engine.

Engine loggers write through the standard library ``logging`` module, so
nothing is emitted until the host application sets up handlers, either with
``configure_logging`` or its own logging setup.
"""
import logging
import sys
from typing import Optional

import structlog

ROOT_LOGGER = "catan_rules"


def configure_logging(environment: str = "development"):
    """Configure structured logging based on environment."""
    level = logging.INFO if environment == "production" else logging.DEBUG

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if environment == "production" else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()


def get_logger(name: Optional[str] = None):
    """Get a logger backed by the standard library logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
