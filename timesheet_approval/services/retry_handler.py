"""
Retrying of store calls.

Transient failures (as judged by the retry condition) are retried with
capped exponential backoff plus jitter. A circuit breaker counts calls
that exhausted their retries and, past a threshold, refuses further
calls until a cool-down has elapsed; the first call after the cool-down
is let through as a trial.
"""

import logging
import random
import threading
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from timesheet_approval.services.error_classifier import ErrorClassifier

logger = logging.getLogger(__name__)


class RetryExhaustedException(Exception):
    """Every attempt of a call failed with a retryable error."""

    def __init__(self, message: str, last_exception: Exception):
        self.last_exception = last_exception
        super().__init__(message)


class CircuitBreakerError(Exception):
    """The circuit breaker is open and the call was not attempted."""


@dataclass
class RetryStats:
    total_calls: int = 0
    total_retries: int = 0
    total_failures: int = 0


class CircuitBreaker:
    """Open/half-open/closed state shared by all calls of one handler.

    Attributes:
        threshold: Consecutive exhausted calls that open the circuit
        timeout: Seconds the circuit stays open before a trial call
        failures: Consecutive exhausted calls so far
        opened_at: ``time.time()`` when the circuit opened, 0 when closed
    """

    def __init__(self, threshold: int, timeout: float):
        self.threshold = threshold
        self.timeout = timeout
        self.failures = 0
        self.opened_at = 0.0

    @property
    def is_open(self) -> bool:
        return self.opened_at > 0

    def allows_call(self) -> bool:
        if not self.is_open:
            return True
        if time.time() - self.opened_at >= self.timeout:
            logger.info("Circuit breaker half-open, letting a trial call through")
            return True
        return False

    def on_success(self) -> None:
        if self.is_open:
            logger.info("Circuit breaker closed after successful call")
        self.failures = 0
        self.opened_at = 0.0

    def on_failure(self) -> None:
        self.failures += 1
        if not self.is_open and self.failures >= self.threshold:
            logger.warning(f"Circuit breaker opened after {self.failures} failures")
            self.opened_at = time.time()


class RetryHandler:
    """
    Run a callable, retrying transient failures.

    Safe to share between worker threads; the REST stores call it from
    ``asyncio.to_thread``.

    Example:
        >>> handler = RetryHandler(max_retries=2, base_delay=0.5)
        >>> handler.execute_with_retry(session.get, url, timeout=10)
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_base: float = 2,
        jitter_factor: float = 0.1,
        circuit_breaker_threshold: int = 5,
        circuit_breaker_timeout: float = 30.0,
        retry_condition: Optional[Callable[[Exception], bool]] = None,
    ):
        """
        Args:
            max_retries: Attempts after the first one
            base_delay: Delay before the first retry (seconds)
            max_delay: Upper bound for any single delay (seconds)
            exponential_base: Growth factor of the delay per attempt
            jitter_factor: Relative random spread applied to each delay
            circuit_breaker_threshold: Exhausted calls that open the circuit
            circuit_breaker_timeout: Cool-down before a trial call (seconds)
            retry_condition: Whether an exception is worth retrying;
                ``ErrorClassifier.is_retryable`` when omitted
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter_factor = jitter_factor
        self.retry_condition = retry_condition or ErrorClassifier().is_retryable

        self.breaker = CircuitBreaker(circuit_breaker_threshold, circuit_breaker_timeout)
        self.stats = RetryStats()
        self._lock = threading.Lock()

    @property
    def circuit_breaker_threshold(self) -> int:
        return self.breaker.threshold

    @property
    def circuit_breaker_timeout(self) -> float:
        return self.breaker.timeout

    def _calculate_delay(self, attempt: int) -> float:
        """Backoff before retry number ``attempt + 1`` (attempt is 0-based)."""
        delay = min(self.base_delay * self.exponential_base**attempt, self.max_delay)
        spread = delay * self.jitter_factor
        return max(0.0, delay + random.uniform(-spread, spread))

    def execute_with_retry(self, func: Callable, *args, **kwargs) -> Any:
        """
        Call ``func(*args, **kwargs)`` until it succeeds or retries run out.

        Raises:
            CircuitBreakerError: If the circuit is open
            RetryExhaustedException: If every attempt failed with a
                retryable error
            Exception: The original error when it is not retryable
        """
        with self._lock:
            self.stats.total_calls += 1
            if not self.breaker.allows_call():
                raise CircuitBreakerError("Circuit breaker is open")

        name = getattr(func, "__name__", repr(func))
        attempt = 0
        while True:
            try:
                result = func(*args, **kwargs)
                break
            except Exception as e:
                if not self.retry_condition(e):
                    logger.debug(f"{name} failed with non-retryable {type(e).__name__}")
                    raise
                if attempt == self.max_retries:
                    logger.warning(f"{name} still failing after {attempt} retries")
                    with self._lock:
                        self.stats.total_retries += attempt
                        self.stats.total_failures += 1
                        self.breaker.on_failure()
                    raise RetryExhaustedException(
                        f"Gave up after {attempt} retries: {type(e).__name__}: {e}",
                        last_exception=e,
                    )

                delay = self._calculate_delay(attempt)
                attempt += 1
                logger.debug(
                    f"{name} failed ({type(e).__name__}: {e}), "
                    f"retry {attempt}/{self.max_retries} in {delay:.2f}s"
                )
                time.sleep(delay)

        with self._lock:
            self.stats.total_retries += attempt
            self.breaker.on_success()
        if attempt:
            logger.info(f"{name} succeeded after {attempt} retries")
        return result

    def get_retry_statistics(self) -> Dict[str, Any]:
        with self._lock:
            return {
                **asdict(self.stats),
                "circuit_breaker_open": self.breaker.is_open,
                "failure_count": self.breaker.failures,
            }

    def reset_circuit_breaker(self) -> None:
        with self._lock:
            self.breaker.on_success()
        logger.info("Circuit breaker manually reset")
