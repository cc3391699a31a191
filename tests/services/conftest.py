"""Service test fixtures — in-memory SQLite ledger, frozen clock, FastAPI client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Store and clock share one FakeNow, so created_at and period bounds agree
    - get_ledger dependency overridden to use the test ledger

Design Decisions:
    - SQLite in-memory: fast, no external dependency; aiosqlite uses a static
      pool for :memory: so every session sees the same database
"""

import pytest
from datetime import timezone
from httpx import ASGITransport, AsyncClient

import noodles.models  # noqa: F401
from noodles.api.dependencies import get_ledger
from noodles.config import Settings
from noodles.core.period_clock import PeriodClock
from noodles.db.base import Base
from noodles.infrastructure.database import DatabaseSessionManager
from noodles.infrastructure.ledger_store import SqlLedgerStore
from noodles.main import app
from noodles.services.recognition_ledger import RecognitionLedger
from tests.services.ledger_factories import FakeNow, utc


@pytest.fixture
def now():
    return FakeNow(utc(2026, 10, 15, 12, 0, 0))


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.close()


UNREACHABLE_URL = "postgresql+asyncpg://u:p@127.0.0.1:1/db"


@pytest.fixture
async def unreachable_manager():
    """Manager pointed at a port nothing listens on."""
    manager = DatabaseSessionManager(UNREACHABLE_URL)
    yield manager
    await manager.close()


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
def clock(now):
    return PeriodClock(timezone.utc, now)


@pytest.fixture
def store(db_manager, now):
    return SqlLedgerStore(db_manager, now)


@pytest.fixture
def ledger(store, clock, settings):
    return RecognitionLedger(store, clock, settings)


@pytest.fixture
async def client(ledger):
    """FastAPI test client with the ledger dependency overridden."""
    app.dependency_overrides[get_ledger] = lambda: ledger

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
