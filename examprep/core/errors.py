"""Application-specific exceptions for consistent error handling."""

from typing import Any


class ExamPrepError(Exception):
    """Base error with a stable error code."""

    code = "EXAMPREP_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | list[Any] | None = None):
        """Initialize application error."""
        super().__init__(message)
        self.message = message
        self.details = details


class CatalogLoadError(ExamPrepError):
    """The question catalog is missing or malformed. Fatal at startup."""

    code = "CATALOG_LOAD_FAILED"


class PerformanceStoreError(ExamPrepError):
    """A performance store query failed."""

    code = "PERFORMANCE_STORE_FAILED"


class InvalidSelectionModeError(ExamPrepError, ValueError):
    """Unrecognized selection mode name."""

    code = "INVALID_SELECTION_MODE"
