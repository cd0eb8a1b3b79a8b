"""Structured logging utilities with context support."""

import contextvars
import functools
import inspect
import logging
import uuid
from typing import Any, Callable, Dict, Optional, cast

# Context fields follow asyncio tasks and asyncio.to_thread workers
_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "log_context", default={}
)

SENSITIVE_FIELDS = {
    "password",
    "token",
    "api_key",
    "secret",
    "access_token",
    "credentials",
    "auth",
    "authorization",
}


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for tracking one user action."""
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID, or None if not set."""
    return _log_context.get().get("correlation_id")


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get())


class LogContext:
    """
    Context manager for adding structured fields to log records.

    Fields apply to every record logged within the scope, including
    records from tasks and worker threads started inside it.

    Example:
        with LogContext(user="ana@example.com", project="Apollo"):
            logger.info("Submitting entry")
            # Log will include user and project fields
    """

    def __init__(self, **kwargs):
        self.fields = kwargs
        self._token: Optional[contextvars.Token] = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


class _ContextFilter(logging.Filter):
    """Logging filter that copies context fields onto log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            setattr(record, key, value)
        return True


def sanitize_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Redact values of sensitive keys, recursively.

    Args:
        data: Dictionary to sanitize

    Returns:
        Copy of the dictionary with sensitive values redacted
    """
    if not isinstance(data, dict):
        return data

    sanitized: Dict[str, Any] = {}

    for key, value in data.items():
        if any(sensitive in str(key).lower() for sensitive in SENSITIVE_FIELDS):
            sanitized[key] = "***REDACTED***" if value is not None else None
        elif isinstance(value, dict):
            sanitized[key] = sanitize_sensitive_data(cast(Dict[str, Any], value))
        else:
            sanitized[key] = value

    return sanitized


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Decorator to log function entry, exit and exceptions.

    Works for plain functions and coroutine functions alike.

    Args:
        func: Function to decorate (when used without arguments)
        include_args: Whether to include function arguments in logs
        level: Log level to use (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Decorated function

    Example:
        @log_function_call
        async def commit(self, comment=None):
            ...

        @log_function_call(include_args=True, level="INFO")
        def resolve(project, today):
            ...
    """

    def decorator(f: Callable) -> Callable:
        logger = logging.getLogger(f.__module__)
        log_level = getattr(logging, level.upper())

        def log_entry(args, kwargs):
            if include_args:
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                signature = ", ".join(args_repr + kwargs_repr)
                logger.log(log_level, f"Entering {f.__name__} with args: {signature}")
            else:
                logger.log(log_level, f"Entering {f.__name__}")

        def log_exception(e: Exception):
            logger.error(
                f"Exception in {f.__name__}: {type(e).__name__}: {e}",
                exc_info=True,
            )

        if inspect.iscoroutinefunction(f):

            @functools.wraps(f)
            async def async_wrapper(*args, **kwargs):
                log_entry(args, kwargs)
                try:
                    result = await f(*args, **kwargs)
                except Exception as e:
                    log_exception(e)
                    raise
                logger.log(log_level, f"Exiting {f.__name__}")
                return result

            return async_wrapper

        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            log_entry(args, kwargs)
            try:
                result = f(*args, **kwargs)
            except Exception as e:
                log_exception(e)
                raise
            logger.log(log_level, f"Exiting {f.__name__}")
            return result

        return wrapper

    # Handle both @log_function_call and @log_function_call() syntax
    if func is None:
        return decorator
    return decorator(func)
