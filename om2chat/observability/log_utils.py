"""
Structured logging helpers for the chat pipeline.

Context values attached to log records are flattened to short strings:
embedding vectors become their dimension, chunk and answer text is cut,
so a log line never carries a full vector or a whole document.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from numbers import Real
from typing import Any

MAX_LOGGED_TEXT = 200


def safe_log_value(value: Any, max_length: int = MAX_LOGGED_TEXT) -> str:
    """
    Render a context value for a log record.

    Args:
        value: Value to render
        max_length: Longest text kept before truncation

    Returns:
        str: ``vector[<dim>]`` for numeric sequences, ``<type>(<n> items)`` for
        other sequences, ``dict(<n> keys)`` for mappings, truncated text otherwise
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(item, Real) for item in value):
            return f"vector[{len(value)}]"
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    text = value if isinstance(value, str) else str(value)
    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} chars)"
    return text


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(val) for key, val in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with rendered context fields as record attributes.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Fields such as document_id, stage, chunk_count
    """
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception (with traceback when one is active) plus context.

    error_type and error_msg are added from exc.
    """
    extra = _safe_context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
