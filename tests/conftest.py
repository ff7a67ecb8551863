"""Shared pytest fixtures for sports booking tests."""
import os
from decimal import Decimal
from typing import AsyncGenerator, Optional

# Point the module-level engine at SQLite before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sports_booking.core.database import Base
from sports_booking.domain.models import Sport
from sports_booking.models.booking import Booking
from sports_booking.services.rate_resolver import RateResolver


class FakePriceSource:
    """In-memory price source that records lookups."""

    def __init__(self, prices: Optional[dict] = None, error: Optional[Exception] = None):
        self.prices = prices or {}
        self.error = error
        self.calls = []

    async def get_by_sport(self, sport: Sport):
        self.calls.append(sport)
        if self.error:
            raise self.error
        return self.prices.get(sport.value)


def make_booking(sport="Cricket", date="2024-03-10", start="10:00", end="11:00", amount="600"):
    """Build an unsaved booking row."""
    return Booking(
        sport=sport,
        date=date,
        start_time=start,
        end_time=end,
        amount=Decimal(amount),
        created_by="tests",
    )


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def price_source():
    return FakePriceSource({"Cricket": 750, "Football": "650.50"})


@pytest.fixture
def resolver(price_source):
    return RateResolver(price_source)


@pytest_asyncio.fixture
async def async_client(session_factory, resolver) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the FastAPI app with database and rates overridden."""
    from sports_booking.core.database import get_db
    from sports_booking.main import app
    from sports_booking.services.rate_resolver import get_rate_resolver

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rate_resolver] = lambda: resolver

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
