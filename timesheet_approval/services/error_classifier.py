"""
Error classification for store calls: retryable versus fatal failures.
"""

import logging
from enum import Enum
from typing import Dict, Optional

import requests

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Classification of error types."""

    RETRYABLE = "retryable"  # 429, 5xx, connection errors, timeouts
    FATAL = "fatal"  # other 4xx
    UNKNOWN = "unknown"


def get_status_code(exception: Exception) -> Optional[int]:
    """Return the HTTP status carried by a requests exception, if any."""
    response = getattr(exception, "response", None)
    if isinstance(exception, requests.exceptions.RequestException) and response is not None:
        return response.status_code
    return None


class ErrorClassifier:
    """
    Classifies store errors to decide whether a retry makes sense and how
    to describe the failure to the user.

    Example:
        >>> classifier = ErrorClassifier()
        >>> classifier.is_retryable(requests.exceptions.ConnectionError())
        True
    """

    def __init__(self):
        self._stats: Dict[str, int] = {
            "retryable": 0,
            "fatal": 0,
            "unknown": 0,
            "total": 0,
        }

    def classify(self, exception: Exception) -> ErrorType:
        """
        Classify an exception into retryable, fatal, or unknown.

        Args:
            exception: The exception to classify

        Returns:
            ErrorType classification
        """
        error_type = self._classify(exception)
        self._stats["total"] += 1
        self._stats[error_type.value] += 1
        return error_type

    def _classify(self, exception: Exception) -> ErrorType:
        status_code = get_status_code(exception)
        if status_code is not None:
            if status_code == 429 or 500 <= status_code < 600:
                return ErrorType.RETRYABLE
            if 400 <= status_code < 500:
                return ErrorType.FATAL

        if isinstance(
            exception,
            (requests.exceptions.ConnectionError, requests.exceptions.Timeout),
        ):
            return ErrorType.RETRYABLE

        return ErrorType.UNKNOWN

    def is_retryable(self, exception: Exception) -> bool:
        return self.classify(exception) == ErrorType.RETRYABLE

    def describe(self, exception: Exception) -> str:
        """
        Get a human-readable description of a store failure.

        Args:
            exception: The exception to describe

        Returns:
            Description suitable for a user-facing message
        """
        status_code = get_status_code(exception)
        if status_code == 429:
            return "The timesheet server is busy (HTTP 429)"
        if status_code == 404:
            return "The requested record does not exist (HTTP 404)"
        if status_code is not None and 500 <= status_code < 600:
            return f"The timesheet server failed (HTTP {status_code})"
        if status_code is not None:
            return f"The timesheet server rejected the request (HTTP {status_code})"

        if isinstance(exception, requests.exceptions.Timeout):
            return "The timesheet server did not respond in time"
        if isinstance(exception, requests.exceptions.ConnectionError):
            return "Could not connect to the timesheet server"

        return f"{type(exception).__name__}: {exception}"

    def get_statistics(self) -> Dict[str, int]:
        return self._stats.copy()

    def reset_statistics(self):
        self._stats = {"retryable": 0, "fatal": 0, "unknown": 0, "total": 0}
