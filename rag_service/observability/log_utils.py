"""
Structured logging helpers.

Values passed through `extra=` are stringified and bounded: embedding
vectors are summarized by dimension, long text is truncated, and
credential-bearing keys are masked so provider keys never reach the logs.

Dependencies: logging (stdlib)
System role: Safe log context for provider and index operations
"""

import logging
from numbers import Number
from typing import Any

MAX_VALUE_LENGTH = 500
SECRET_KEYS = frozenset({"api_key", "authorization", "token", "secret"})
REDACTED = "***"


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a value for a log record.

    Args:
        value: Value to render
        max_length: Truncation limit for the rendered text

    Returns:
        str: Bounded representation; numeric sequences render as vector(dim=N)
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(item, Number) for item in value):
            return f"vector(dim={len(value)})"
        rendered = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        rendered = f"dict({len(value)} keys)"
    else:
        try:
            rendered = str(value)
        except Exception as e:
            return f"<unrenderable {type(value).__name__}: {type(e).__name__}>"

    if len(rendered) > max_length:
        return f"{rendered[:max_length]}... (truncated, {len(rendered)} total)"
    return rendered


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {
        key: REDACTED if key.lower() in SECRET_KEYS else safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Log with masked, bounded `extra` context."""
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception at ERROR with its traceback and structured context.

    Service exceptions contribute their `details` under `error_details`.

    Args:
        logger: Target logger
        message: Log message
        exc: Exception being reported
        **context: Additional context
    """
    safe_context = _safe_context(context)
    safe_context["error_type"] = type(exc).__name__
    safe_context["error_msg"] = safe_log_value(getattr(exc, "message", None) or str(exc))
    details = getattr(exc, "details", None)
    if details:
        safe_context["error_details"] = safe_log_value(_safe_context(details), max_length=1000)
    logger.error(message, exc_info=exc, extra=safe_context)
