import asyncio
import socket
import uuid
from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from profile_wizard.core.config import settings
from profile_wizard.models.base import Base
from profile_wizard.schemas.profile import ProfileSubmission
from profile_wizard.schemas.submission import SubmissionRecord

# Use separate test database
TEST_DATABASE_URL = settings.database_url.replace(
    settings.database_name, f"{settings.database_name}_test"
)

TEST_EMAIL = "jane@x.com"


def make_payload(**overrides: object) -> dict:
    """Build a complete, valid wire-format profile.

    Args:
        **overrides: Wire-name keys to replace. A value of ``...`` removes
            the key entirely.

    Returns:
        Flat camelCase profile dict.
    """
    payload: dict = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": TEST_EMAIL,
        "phone": "+15551234567",
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "postalCode": "62701",
        "country": "USA",
        "website": "https://jane.dev",
        "facebook": None,
        "instagram": None,
        "linkedin": "https://linkedin.com/in/janedoe",
        "skills": [
            {"name": "Go", "level": "advanced"},
            {"name": "Rust", "level": "intermediate"},
            {"name": "SQL", "level": "beginner"},
        ],
        "languages": [{"name": "English", "proficiency": "native"}],
        "interests": ["Open source"],
        "hobbies": ["Climbing"],
        "experiences": [
            {
                "company": "Acme",
                "title": "Engineer",
                "location": "Remote",
                "startDate": "2020-01",
                "endDate": None,
                "current": True,
                "description": "Backend services",
            }
        ],
        "education": [
            {
                "school": "State University",
                "degree": "BSc",
                "field": "Computer Science",
                "startDate": "2014-09",
                "endDate": "2018-06",
            }
        ],
    }
    for key, value in overrides.items():
        if value is ...:
            payload.pop(key, None)
        else:
            payload[key] = value
    return payload


# =============================================================================
# Collaborator fakes
# =============================================================================


class FakeRecordStore:
    """In-memory RecordStore that counts writes and enforces unique emails."""

    def __init__(self, *, error: Exception | None = None) -> None:
        self.records: dict[str, SubmissionRecord] = {}
        self.create_calls = 0
        self._error = error

    async def create_unique(self, profile: ProfileSubmission) -> SubmissionRecord | None:
        self.create_calls += 1
        # Yield once so concurrent submissions interleave here
        await asyncio.sleep(0)
        if self._error is not None:
            raise self._error
        email = profile.email.lower()
        if email in self.records:
            return None
        record = SubmissionRecord.model_validate(
            {
                **profile.model_dump(),
                "email": email,
                "id": uuid.uuid4(),
                "created_at": datetime.now(UTC),
            }
        )
        self.records[email] = record
        return record


class FakeNotifier:
    """NotificationSender that records messages instead of sending them."""

    def __init__(self, *, succeed: bool = True) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self._succeed = succeed

    async def send(self, to_address: str, subject: str, body: str) -> bool:
        self.sent.append((to_address, subject, body))
        return self._succeed


# =============================================================================
# Database fixtures
# =============================================================================


def _is_postgres_available() -> bool:
    """Check if PostgreSQL is accepting connections.

    Returns:
        True if PostgreSQL is reachable on port 5432, False otherwise.
    """
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex(("127.0.0.1", 5432))
        sock.close()
        return result == 0
    except OSError:
        return False


# Check once at module load time
_POSTGRES_AVAILABLE = _is_postgres_available()


def skip_if_no_postgres() -> None:
    """Skip test if PostgreSQL is not available."""
    if not _POSTGRES_AVAILABLE:
        pytest.skip(
            "PostgreSQL not available on port 5432. "
            "Start database with: docker compose up -d"
        )


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine with the submissions table.

    Skips test if PostgreSQL is not available (e.g., Docker not running).
    """
    skip_if_no_postgres()

    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


# =============================================================================
# API Test Fixtures
# =============================================================================


@pytest.fixture
def record_store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest_asyncio.fixture
async def api_client(
    record_store: FakeRecordStore,
    notifier: FakeNotifier,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with in-memory storage and a recording mailer.

    Overrides the record store and notification sender dependencies so API
    tests never touch PostgreSQL or Resend.

    Yields:
        AsyncClient bound to the ASGI app.
    """
    from profile_wizard.api.deps import get_notification_sender, get_record_store
    from profile_wizard.main import app

    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_notification_sender] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def disable_rate_limiting() -> Iterator[None]:
    """Disable rate limiting during tests.

    Rate limiting is tested separately; disable for other tests to avoid
    flaky failures from rate limit triggers.
    """
    from profile_wizard.core.rate_limiting import limiter

    original_enabled = limiter.enabled
    limiter.enabled = False

    yield

    limiter.enabled = original_enabled
