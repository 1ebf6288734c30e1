"""Exception handling utilities for consistent error formatting.

This module formats exceptions as structured JSON, logs them consistently
and maps them to HTTP status codes for the API layer.
"""

import json
import logging
import traceback
from typing import Any

from ..core.domain.exceptions import LLMOError

logger = logging.getLogger(__name__)

_RATE_LIMIT_MARKERS = ("429", "quota", "rate limit", "resource_exhausted", "too many requests")


def format_exception_json(
    exc: BaseException,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Format any exception as structured JSON.

    Works with both LLMOError and standard Python exceptions.

    Args:
        exc: The exception to format.
        include_trace: If True, include full stack trace.
        extra_context: Additional context to include in output.

    Returns:
        Dictionary with structured error information.
    """
    if isinstance(exc, LLMOError):
        result = exc.to_dict(include_trace=include_trace)
        if extra_context:
            result.setdefault("context", {}).update(extra_context)
        return result

    tb = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    last_frame = tb[-1] if tb else None

    result: dict[str, Any] = {
        "error": {
            "type": type(exc).__name__,
            "code": "PYTHON_ERR",
            "message": str(exc),
        },
        "location": {
            "class": "<unknown>",
            "method": last_frame.name if last_frame else "<unknown>",
            "file": last_frame.filename.split("/")[-1] if last_frame else "<unknown>",
            "line": last_frame.lineno if last_frame else 0,
        },
    }

    if extra_context:
        result["context"] = extra_context

    if include_trace:
        result["stack_trace"] = [
            line.strip()
            for line in traceback.format_exception(type(exc), exc, exc.__traceback__)
            if line.strip()
        ]

    return result


def log_exception(
    exc: BaseException,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log exception in structured JSON format.

    Args:
        exc: The exception to log.
        log: Logger instance to use (defaults to module logger).
        level: Logging level (default: ERROR).
        extra_context: Additional context to include.

    Example:
        >>> try:
        ...     service.run(url, query)
        ... except Exception as e:
        ...     log_exception(e, extra_context={"url": url})
    """
    log_instance = log or logger

    exc_data = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    log_instance.log(level, json.dumps(exc_data, indent=2, default=str))


def get_error_code(exc: BaseException) -> str:
    """Get the error code from an exception.

    Returns:
        Error code string (e.g., "LLMO_FET_002" or "PYTHON_ERR").
    """
    if isinstance(exc, LLMOError):
        return exc.error_code
    return "PYTHON_ERR"


def _looks_rate_limited(exc: BaseException) -> bool:
    text = f"{exc} {getattr(exc, 'cause', '') or ''}".lower()
    return any(marker in text for marker in _RATE_LIMIT_MARKERS)


def get_http_status_code(exc: BaseException) -> int:
    """Map exception type to appropriate HTTP status code.

    Returns:
        HTTP status code (422, 429, 500, 502, 503, etc.).
    """
    from ..core.domain.exceptions import (
        ConfigurationError,
        ContentError,
        EmbeddingProviderError,
        EmbeddingUpstreamError,
        FetchError,
        StorageError,
    )

    if isinstance(exc, ContentError):
        return 422
    if isinstance(exc, FetchError):
        return 502
    if isinstance(exc, EmbeddingUpstreamError):
        return 429 if _looks_rate_limited(exc) else 503
    if isinstance(exc, EmbeddingProviderError | StorageError):
        return 503
    if isinstance(exc, ConfigurationError):
        return 500
    if isinstance(exc, LLMOError):
        return 500

    if isinstance(exc, ValueError):
        return 400
    if isinstance(exc, ConnectionError | TimeoutError):
        return 503

    return 500
