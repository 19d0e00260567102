"""
Retry Pattern Implementation

Bounded retry with exponential backoff and jitter, used to re-run database
units of work that lost a serialization race.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    initial_delay: float = 0.05  # seconds
    max_delay: float = 2.0  # seconds
    exponential_base: float = 2.0
    jitter: bool = True  # Add randomness to delays
    jitter_factor: float = 0.1  # 10% jitter
    retryable_exceptions: tuple[type[BaseException], ...] = (Exception,)


class RetryExhaustedError(Exception):
    """Raised when all retry attempts have been exhausted."""

    def __init__(self, message: str, last_exception: Exception | None = None, attempts: int = 0):
        super().__init__(message)
        self.last_exception = last_exception
        self.attempts = attempts


class Retryer:
    """
    Retry mechanism with exponential backoff.

    Only exceptions listed in ``retryable_exceptions`` are retried; anything
    else propagates on the first occurrence.

    Example:
        ```python
        retryer = Retryer(max_attempts=3, retryable_exceptions=(SerializationFailure,))
        result = await retryer.execute(run_unit_of_work)
        ```
    """

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 0.05,
        max_delay: float = 2.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
        retryable_exceptions: tuple[type[BaseException], ...] | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize retryer.

        Args:
            max_attempts: Maximum number of attempts (1 disables retries)
            initial_delay: Initial delay between retries
            max_delay: Maximum delay between retries
            exponential_base: Base for exponential backoff
            jitter: Whether to add random jitter
            retryable_exceptions: Exceptions that trigger retry
            sleep: Awaitable sleep function (replaceable in tests)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.config = RetryConfig(
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            max_delay=max_delay,
            exponential_base=exponential_base,
            jitter=jitter,
            retryable_exceptions=retryable_exceptions or (Exception,),
        )
        self._sleep = sleep

    def _calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay for the given attempt number.

        Uses exponential backoff with optional jitter.
        """
        delay = self.config.initial_delay * (self.config.exponential_base ** (attempt - 1))
        delay = min(delay, self.config.max_delay)

        if self.config.jitter:
            jitter_range = delay * self.config.jitter_factor
            delay += random.uniform(-jitter_range, jitter_range)

        return max(0, delay)

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        """
        Execute an async callable with retry logic.

        Returns:
            Result of the callable

        Raises:
            RetryExhaustedError: If every attempt failed with a retryable exception
            Exception: Non-retryable exception, re-raised unchanged
        """
        for attempt in range(1, self.config.max_attempts + 1):
            try:
                return await func()
            except self.config.retryable_exceptions as e:
                if attempt >= self.config.max_attempts:
                    raise RetryExhaustedError(
                        f"All {self.config.max_attempts} retry attempts exhausted",
                        last_exception=e if isinstance(e, Exception) else None,
                        attempts=attempt,
                    ) from e

                delay = self._calculate_delay(attempt)
                logger.warning(
                    f"Retry attempt {attempt}/{self.config.max_attempts} failed: {e}. "
                    f"Retrying in {delay:.3f}s"
                )
                await self._sleep(delay)

        raise RetryExhaustedError(
            f"Retry logic error after {self.config.max_attempts} attempts",
            attempts=self.config.max_attempts,
        )
