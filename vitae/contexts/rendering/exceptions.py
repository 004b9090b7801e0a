"""Custom exceptions for the rendering context with export failure categories."""

from enum import Enum
from typing import Any, Dict, Optional


class ExportErrorCategory(str, Enum):
    """
    Closed set of export failure kinds.

    Each category carries the message shown to the user, whether retrying
    can help, and the HTTP status the delivery layer answers with.
    """

    LIBRARY_UNAVAILABLE = "library_unavailable"
    TARGET_NOT_FOUND = "target_not_found"
    EMPTY_CONTENT = "empty_content"
    BROWSER_LAUNCH = "browser_launch"
    RENDER_TIMEOUT = "render_timeout"
    DOCUMENT_GENERATION = "document_generation"
    BUSY = "busy"
    GENERIC = "generic"

    @property
    def user_message(self) -> str:
        return _CATEGORY_DETAILS[self]["message"]

    @property
    def retryable(self) -> bool:
        return _CATEGORY_DETAILS[self]["retryable"]

    @property
    def http_status(self) -> int:
        return _CATEGORY_DETAILS[self]["status"]


_CATEGORY_DETAILS: Dict[ExportErrorCategory, Dict[str, Any]] = {
    ExportErrorCategory.LIBRARY_UNAVAILABLE: {
        "message": "PDF export is not available on this server. Please try again later.",
        "retryable": False,
        "status": 500,
    },
    ExportErrorCategory.TARGET_NOT_FOUND: {
        "message": "The resume preview could not be prepared for export. Please try again.",
        "retryable": True,
        "status": 500,
    },
    ExportErrorCategory.EMPTY_CONTENT: {
        "message": "Your resume looks empty. Add some content before exporting.",
        "retryable": False,
        "status": 422,
    },
    ExportErrorCategory.BROWSER_LAUNCH: {
        "message": "The PDF renderer could not be started. Please try again in a moment.",
        "retryable": True,
        "status": 503,
    },
    ExportErrorCategory.RENDER_TIMEOUT: {
        "message": "Rendering your resume took too long. Please try again.",
        "retryable": True,
        "status": 504,
    },
    ExportErrorCategory.DOCUMENT_GENERATION: {
        "message": "Your resume could not be laid out with this template.",
        "retryable": False,
        "status": 422,
    },
    ExportErrorCategory.BUSY: {
        "message": "An export is already in progress. Please wait for it to finish.",
        "retryable": True,
        "status": 409,
    },
    ExportErrorCategory.GENERIC: {
        "message": "Failed to export PDF. Please try again.",
        "retryable": True,
        "status": 500,
    },
}

_missing = set(ExportErrorCategory) - set(_CATEGORY_DETAILS)
if _missing:
    raise RuntimeError(f"Export error categories without details: {sorted(c.value for c in _missing)}")


class ExportError(Exception):
    """
    Exception raised when a résumé cannot be exported to PDF.

    Attributes:
        category: ExportErrorCategory classifying the failure
        message: User-facing description (defaults to the category's message)
        strategy: Export strategy that failed ("server" or "capture")
        original_error: The lower-level error that caused the failure
    """

    def __init__(
        self,
        category: ExportErrorCategory,
        message: Optional[str] = None,
        strategy: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ):
        self.category = category
        self.message = message or category.user_message
        self.strategy = strategy
        self.original_error = original_error

        # Build enhanced error message
        parts = [f"[{category.value}] {self.message}"]

        if strategy:
            parts.append(f"Strategy: {strategy}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))

    @property
    def retryable(self) -> bool:
        return self.category.retryable

    @property
    def http_status(self) -> int:
        return self.category.http_status

    def to_dict(self) -> Dict[str, Any]:
        """JSON body returned to API clients."""
        return {
            "category": self.category.value,
            "message": self.message,
            "retryable": self.retryable,
        }


class RenderTimeoutError(Exception):
    """
    Raised by browser pages and capture surfaces when a bounded wait expires.

    Exporters translate it into RENDER_TIMEOUT or TARGET_NOT_FOUND.
    """

    pass
