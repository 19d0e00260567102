"""
Shared pytest fixtures for all tests.

This module provides the test environment (an on-disk SQLite database, a fast
bcrypt cost, a known admin account), database schema fixtures, an in-memory
notification channel and an in-process transaction manager for unit tests.
"""

import asyncio
import os
import tempfile
from pathlib import Path

import bcrypt

# ============================================================================
# TEST ENVIRONMENT (must be set before any app module is imported)
# ============================================================================

_TEST_DIR = Path(tempfile.mkdtemp(prefix="citas_test_"))

ADMIN_EMAIL = "admin@clinica.com.ar"
ADMIN_PASSWORD = "admin-secret-123"

os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'citas_test.db'}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["REPORTS_DIR"] = str(_TEST_DIR / "reports")
os.environ["ADMIN_EMAIL"] = ADMIN_EMAIL
os.environ["ADMIN_PASSWORD_HASH"] = bcrypt.hashpw(ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode(
    "utf-8"
)
os.environ["NOTIFICATION_CHANNEL"] = "email"
os.environ.pop("SMTP_HOST", None)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from app.core.container import get_container, reset_container  # noqa: E402
from app.core.domain import NotificationException  # noqa: E402
from app.core.interfaces.transaction import SERIALIZABLE  # noqa: E402
from app.database.async_db import AsyncSessionLocal, async_engine, create_tables  # noqa: E402
from app.models.db.base import Base  # noqa: E402

# ============================================================================
# TEST DOUBLES
# ============================================================================


class FakeNotificationService:
    """In-memory notification channel recording every delivered message."""

    channel = "email"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    def resolve_recipient(self, patient) -> str | None:
        return patient.email

    async def notify(self, recipient: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationException("email", "SMTP no disponible")
        self.sent.append((recipient, subject, body))

    async def close(self) -> None:
        return None


class InlineTransactionManager:
    """Runs the unit of work directly, recording how it was requested."""

    def __init__(self):
        self.calls: list[tuple[str, str | None, bool]] = []

    async def run(self, work, *, operation: str, isolation_level: str | None = SERIALIZABLE, retry: bool = False):
        self.calls.append((operation, isolation_level, retry))
        return await work()


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


async def _create_schema() -> None:
    await create_tables(async_engine)


async def _drop_schema() -> None:
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_schema():
    """Create all tables for one async test and drop them afterwards."""
    await _create_schema()
    yield
    await _drop_schema()


@pytest.fixture
def sync_db_schema():
    """Same as ``db_schema`` for synchronous (TestClient) tests."""
    asyncio.run(_create_schema())
    yield
    asyncio.run(_drop_schema())


@pytest_asyncio.fixture
async def db_session(db_schema):
    """
    Create a fresh database session for each test.

    Each test gets its own session that is rolled back after the test completes.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
def session_factory():
    """Factory of independent sessions (one per simulated request)."""
    return AsyncSessionLocal


# ============================================================================
# CONTAINER FIXTURES
# ============================================================================


@pytest.fixture
def notification_service() -> FakeNotificationService:
    return FakeNotificationService()


@pytest.fixture
def container(notification_service):
    """Fresh global container wired with the in-memory notification channel."""
    reset_container()
    instance = get_container()
    instance.base.set_notification_service(notification_service)
    yield instance
    reset_container()


@pytest.fixture
def inline_tx() -> InlineTransactionManager:
    return InlineTransactionManager()


@pytest.fixture
def admin_credentials() -> tuple[str, str]:
    """Email and password of the admin account configured for the test run."""
    return ADMIN_EMAIL, ADMIN_PASSWORD
