"""Base exception classes for LLMO Checker.

Every error raised by the diagnosis pipeline derives from ``LLMOError``,
which carries:
- an error code for quick identification in logs
- the class, method, file and line it was raised from
- the underlying cause, when wrapping a library error
- a ``user_message`` safe to show to end users
- JSON serialization for structured logging
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class ExceptionContext:
    """Location where an exception was raised."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for JSON serialization."""
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


class LLMOError(Exception):
    """Base exception for all LLMO Checker errors.

    Example:
        try:
            response = session.get(url, timeout=30)
        except requests.RequestException as e:
            raise FetchError(
                "Failed to fetch URL",
                cause=e,
                context={"url": url},
            )
    """

    error_code: str = "LLMO_ERR_001"
    user_message: str = "An error occurred during diagnosis. Please try again later."

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception with message and optional context.

        Args:
            message: Developer-facing error message (logged, not displayed).
            cause: The underlying exception that caused this error.
            context: Additional key-value pairs for debugging.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = context or {}
        self.location = self._capture_location()
        self.stack_trace = (
            "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))
            if cause
            else None
        )
        if cause is not None:
            self.__cause__ = cause

    def _capture_location(self) -> ExceptionContext:
        """Capture class/method/file/line of the raise site."""
        frame = inspect.currentframe()
        # Skip _capture_location and every __init__ in the subclass chain
        while frame and frame.f_code.co_name in ("_capture_location", "__init__"):
            frame = frame.f_back

        if frame:
            instance = frame.f_locals.get("self", None)
            return ExceptionContext(
                class_name=type(instance).__name__ if instance is not None else "<module>",
                method_name=frame.f_code.co_name,
                file_name=frame.f_code.co_filename.split("\\")[-1].split("/")[-1],
                line_number=frame.f_lineno,
            )
        return ExceptionContext("<unknown>", "<unknown>", "<unknown>", 0)

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Convert exception to a structured dictionary.

        Args:
            include_trace: If True, include the cause's stack trace.

        Returns:
            Dictionary with error details, location, and optional trace.
        """
        result: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }

        if self.extra_context:
            result["context"] = dict(self.extra_context)

        if include_trace and self.stack_trace:
            result["stack_trace"] = [line for line in self.stack_trace.split("\n") if line.strip()]

        if self.cause:
            result["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }

        return result
