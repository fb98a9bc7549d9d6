"""Logging configuration for the nano git analyzer."""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import FilteringBoundLogger

from .config import config


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> FilteringBoundLogger:
    """Configure structured logging; arguments override the environment settings."""
    level = getattr(logging, (log_level or config.app.log_level).upper())
    log_format = (log_format or config.app.log_format).lower()
    
    # Route structlog events through standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]
    
    if log_format == "json":
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
        ])
    else:
        processors.extend([
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
        ])
    
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    
    return structlog.get_logger()


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a logger instance for the given name."""
    return structlog.get_logger(name)


# Initialize logging
logger = configure_logging()
