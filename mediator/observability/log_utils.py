"""
Structured logging helpers.

Converts context values (UUIDs, enums, message lists) into short strings and
masks partner credentials before they reach a log record.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from enum import Enum
from typing import Any
from uuid import UUID

MASK = "***"
SENSITIVE_KEYS = frozenset({"pin", "partner_a_pin", "partner_b_pin", "x_partner_pin", "email"})


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Render a context value for a log record.

    Message text is truncated; collections are summarized by size so thread
    contents are never dumped wholesale.
    """
    if value is None:
        return "None"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    text = str(value)
    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def context_fields(**context: Any) -> dict[str, str]:
    """Build a logging `extra` dict with credentials masked."""
    return {
        key: MASK if key.lower() in SENSITIVE_KEYS else safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with structured context.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs; PIN and email keys are masked
    """
    logger.log(level, message, extra=context_fields(**context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context: Any,
) -> None:
    """Log an exception with traceback, its type and message, and masked context."""
    extra = context_fields(**context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=extra)
