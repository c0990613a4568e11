"""
Structured logging helpers.

Values placed in `extra` must be short and never raise while formatting;
chunk lists and vectors are summarized instead of dumped.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

MAX_LOG_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_LOG_VALUE_LENGTH) -> str:
    """
    Render a value for a log record.

    Sequences become "list(N items)", mappings "dict(N keys)", and long
    strings are truncated with their total length noted.
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    try:
        text = value if isinstance(value, str) else str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def log_exception_with_context(logger: logging.Logger, message: str, exc: Exception, **context) -> None:
    """Log `exc` with its traceback plus error_type, error_msg, and summarized context."""
    extra = {key: safe_log_value(value) for key, value in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.exception(message, extra=extra)
