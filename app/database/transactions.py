"""
Explicit transaction scoping for multi-step units of work.

Replaces declarative transaction annotations: a use case hands its atomic
steps to ``SQLAlchemyTransactionManager.run`` which opens a fresh transaction
at the requested isolation level, commits it, and turns serialization
failures into ``ConcurrencyException`` (optionally after bounded retries).
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain.exceptions import ConcurrencyException
from app.core.infrastructure.retry import RetryExhaustedError, Retryer
from app.core.interfaces.transaction import SERIALIZABLE

logger = logging.getLogger(__name__)

T = TypeVar("T")

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})
RETRYABLE_MESSAGES = ("could not serialize access", "deadlock detected", "database is locked")


class SerializationFailure(Exception):
    """A transaction was aborted by the database because of a concurrent one."""


def is_serialization_failure(error: DBAPIError) -> bool:
    """Check whether a driver error means "retry the whole transaction"."""
    orig = getattr(error, "orig", None)
    candidates = [orig, getattr(orig, "__cause__", None)]
    for candidate in candidates:
        if candidate is None:
            continue
        for attr in ("sqlstate", "pgcode"):
            if getattr(candidate, attr, None) in RETRYABLE_SQLSTATES:
                return True
    message = str(orig if orig is not None else error).lower()
    return any(fragment in message for fragment in RETRYABLE_MESSAGES)


class SQLAlchemyTransactionManager:
    """
    Runs units of work in their own transaction on the request session.

    Any transaction the session already holds (for example reads made by
    authorization dependencies) is committed first so the isolation level can
    be applied to a fresh one.
    """

    def __init__(
        self,
        session: AsyncSession,
        max_attempts: int = 3,
        initial_delay: float = 0.05,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.session = session
        self._max_attempts = max_attempts
        self._initial_delay = initial_delay
        self._sleep = sleep

    async def run(
        self,
        work: Callable[[], Awaitable[T]],
        *,
        operation: str,
        isolation_level: str | None = SERIALIZABLE,
        retry: bool = False,
    ) -> T:
        retryer = Retryer(
            max_attempts=self._max_attempts if retry else 1,
            initial_delay=self._initial_delay,
            retryable_exceptions=(SerializationFailure,),
            sleep=self._sleep,
        )
        try:
            return await retryer.execute(lambda: self._run_once(work, isolation_level))
        except RetryExhaustedError as e:
            logger.warning(f"Transaction for '{operation}' lost a serialization race after {e.attempts} attempt(s)")
            raise ConcurrencyException(operation, attempts=e.attempts, reason=str(e.last_exception)) from e

    async def _run_once(self, work: Callable[[], Awaitable[T]], isolation_level: str | None) -> T:
        if self.session.in_transaction():
            await self.session.commit()
        try:
            if isolation_level:
                await self.session.connection(execution_options={"isolation_level": isolation_level})
            result = await work()
            await self.session.commit()
            return result
        except DBAPIError as e:
            await self.session.rollback()
            if is_serialization_failure(e):
                raise SerializationFailure(str(e.orig)) from e
            raise
        except Exception:
            await self.session.rollback()
            raise
