"""
Structured logging configuration for the action gateway.

Uses structlog for structured, context-aware logging with:
- JSON output for production
- Pretty console output for development
- Action name and request path propagation for intercepted requests
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator

import structlog
from structlog.types import Processor

from .config import get_settings

# Context variables for request-scoped data
_action_name: ContextVar[str | None] = ContextVar('action_name', default=None)
_request_path: ContextVar[str | None] = ContextVar('request_path', default=None)


def get_action_name() -> str | None:
    """Get the action name of the request being handled."""
    return _action_name.get()


def get_request_path() -> str | None:
    """Get the path of the request being handled."""
    return _request_path.get()


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor that adds context variables to log entries."""
    action_name = get_action_name()
    request_path = get_request_path()

    if action_name:
        event_dict.setdefault('action_name', action_name)
    if request_path:
        event_dict.setdefault('request_path', request_path)

    return event_dict


def configure_logging(
    json_output: bool = False,
    log_level: str | None = None,
) -> None:
    """
    Configure structlog for the application.

    Args:
        json_output: If True, output JSON logs (for production).
                    If False, output pretty console logs (for development).
        log_level: Override log level (defaults to LOG_LEVEL setting)
    """
    level = log_level or get_settings().LOG_LEVEL
    level_num = getattr(logging, level.upper(), logging.INFO)

    # Standard library logging config
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stdout,
        level=level_num,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_context_info,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    action_name: str | None = None,
    request_path: str | None = None,
) -> Generator[None, None, None]:
    """
    Context manager for setting logging context variables.

    Usage:
        with logging_context(action_name="uploadDefinitions"):
            logger.info("actions.rewritten")  # Includes action_name
    """
    action_token = _action_name.set(action_name) if action_name is not None else None
    path_token = _request_path.set(request_path) if request_path is not None else None
    try:
        yield
    finally:
        if path_token is not None:
            _request_path.reset(path_token)
        if action_token is not None:
            _action_name.reset(action_token)


# Initialize logging on module import (development mode by default)
# create_app() reconfigures from settings
configure_logging(json_output=False)
