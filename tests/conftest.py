"""Test configuration and fixtures.

Each test gets a fresh database:
1. The schema is created on a new engine before the test and dropped after it
2. The default database is SQLite in memory (aiosqlite), so no server is needed
3. Set TEST_DATABASE_URL to run the suite against PostgreSQL instead
4. FastAPI's session dependency is overridden to share the test session
"""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from pathlib import Path

from dotenv import load_dotenv

# Load optional test environment variables before the settings module is imported
test_env_path = Path(__file__).parent.parent / ".env.test"
load_dotenv(test_env_path)

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.database.base import Base  # noqa: E402
from src.database.dependencies import get_db_session  # noqa: E402
from src.features.admin.dependencies import get_current_admin  # noqa: E402
from src.features.admin.models import Admin  # noqa: E402
from src.features.auth.dependencies import get_current_active_donor, get_current_donor  # noqa: E402
from src.features.donor.models import BloodGroup, Donor, DonorStatus  # noqa: E402
from src.features.messages.models import Message  # noqa: E402
from src.features.requests.models import BloodRequest, RequestStatus  # noqa: E402
from src.main import app  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

DEFAULT_PASSWORD = "secret123"


# Database Setup - Function Scope (Fresh Schema Per Test)


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an engine and a fresh schema for one test."""
    engine_kwargs = {"poolclass": StaticPool} if TEST_DATABASE_URL.startswith("sqlite") else {}
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **engine_kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Database session shared by the test and the API under test."""
    async with AsyncSession(bind=db_engine, expire_on_commit=False) as async_session:
        yield async_session


# FastAPI Client & Dependency Overrides


@pytest_asyncio.fixture(autouse=True)
async def override_get_db_session(session: AsyncSession):
    """Override the database session dependency with the test session."""

    async def _get_test_session():
        yield session

    app.dependency_overrides[get_db_session] = _get_test_session
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Unauthenticated async HTTP test client.

    Use donor_client or admin_client for authenticated requests.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Test Data Factories


@pytest_asyncio.fixture
async def make_donor(session: AsyncSession):
    """Factory fixture to create donors with custom fields.

    Usage:
        donor = await make_donor()                                   # defaults
        o_neg = await make_donor(blood_group=BloodGroup.O_NEGATIVE)
        resting = await make_donor(days_since_donation=10)           # not eligible
        banned = await make_donor(status=DonorStatus.SUSPENDED)
    """
    counter = 0

    async def _factory(
        name="Test Donor",
        email=None,
        password=DEFAULT_PASSWORD,
        blood_group=BloodGroup.A_POSITIVE,
        location="Dhaka, Dhanmondi",
        phone_number=None,
        status=DonorStatus.ACTIVE,
        days_since_donation: int | None = None,
        **kwargs,
    ) -> Donor:
        nonlocal counter
        counter += 1

        if email is None:
            email = f"donor{counter}@example.com"
        if phone_number is None:
            phone_number = f"01700{counter:06d}"
        if days_since_donation is not None:
            kwargs["last_donation_date"] = datetime.now(UTC) - timedelta(days=days_since_donation)

        donor = Donor(
            name=name,
            email=email,
            hashed_password=Donor.hash_password(password),
            blood_group=blood_group,
            location=location,
            phone_number=phone_number,
            status=status,
            **kwargs,
        )
        session.add(donor)
        await session.flush()
        await session.refresh(donor)
        return donor

    yield _factory


@pytest_asyncio.fixture
async def make_request(session: AsyncSession):
    """Factory fixture to create blood requests between two donors."""

    async def _factory(requester: Donor, donor: Donor, status=RequestStatus.PENDING, **kwargs) -> BloodRequest:
        blood_request = BloodRequest(
            requester_id=requester.id,
            donor_id=donor.id,
            requester_name=requester.name,
            donor_name=donor.name,
            blood_group=donor.blood_group,
            location=donor.location,
            status=status,
            **kwargs,
        )
        session.add(blood_request)
        await session.flush()
        await session.refresh(blood_request)
        return blood_request

    yield _factory


@pytest_asyncio.fixture
async def make_message(session: AsyncSession):
    """Factory fixture to create a message from one donor to another."""

    async def _factory(sender: Donor, receiver: Donor, text="Can you donate this week?", **kwargs) -> Message:
        message = Message(sender_id=sender.id, receiver_id=receiver.id, text=text, **kwargs)
        session.add(message)
        await session.flush()
        await session.refresh(message)
        return message

    yield _factory


@pytest_asyncio.fixture
async def make_admin(session: AsyncSession):
    async def _factory(username="root", password="adminpass") -> Admin:
        admin = Admin(username=username, hashed_password=Admin.hash_password(password))
        session.add(admin)
        await session.flush()
        await session.refresh(admin)
        return admin

    yield _factory


@pytest_asyncio.fixture
async def donor_client(client: AsyncClient, make_donor):
    """Authenticated client with a regular donor.

    Overrides the auth dependency directly - no JWT issued, no login endpoint hit.

    Returns:
        tuple: (client, donor) - both the HTTP client and the authenticated donor

    """
    donor = await make_donor(name="Current Donor")

    async def override_get_current_donor():
        return donor

    app.dependency_overrides[get_current_donor] = override_get_current_donor
    app.dependency_overrides[get_current_active_donor] = override_get_current_donor

    yield client, donor


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient, make_admin):
    """Authenticated client with an admin.

    Returns:
        tuple: (client, admin)

    """
    admin = await make_admin()

    async def override_get_current_admin():
        return admin

    app.dependency_overrides[get_current_admin] = override_get_current_admin

    yield client, admin
