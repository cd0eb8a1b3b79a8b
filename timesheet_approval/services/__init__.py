"""
Store services for the timesheet workflow.

This package provides:
- Store interfaces (TimesheetStore, ProjectStore)
- REST implementations with retry, backoff and circuit breaker
- In-memory implementations for offline use and tests
- Error classification for store failures
"""

from .error_classifier import ErrorClassifier, ErrorType
from .memory_store import InMemoryProjectStore, InMemoryTimesheetStore
from .rest_store import RestClient, RestProjectStore, RestTimesheetStore
from .retry_handler import CircuitBreakerError, RetryExhaustedException, RetryHandler
from .stores import ProjectStore, TimesheetStore

__all__ = [
    "TimesheetStore",
    "ProjectStore",
    "RestClient",
    "RestTimesheetStore",
    "RestProjectStore",
    "InMemoryTimesheetStore",
    "InMemoryProjectStore",
    "RetryHandler",
    "RetryExhaustedException",
    "CircuitBreakerError",
    "ErrorClassifier",
    "ErrorType",
]
