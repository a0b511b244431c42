"""Pytest configuration and shared fixtures."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from ticket_reports.config import Settings
from ticket_reports.database import create_session_factory
from ticket_reports.main import create_app
from ticket_reports.models import Base


@pytest.fixture
def settings() -> Settings:
    """Production-mode settings; the database comes from the engine fixture."""
    return Settings(DEBUG=False, DATABASE_URL="sqlite+aiosqlite://")


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Fresh SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reports.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def seed(session_factory):
    """Persist model instances in one transaction."""

    async def _seed(*instances) -> None:
        async with session_factory() as session:
            session.add_all(instances)
            await session.commit()

    return _seed


@pytest_asyncio.fixture
async def client(settings, session_factory):
    app = create_app(settings=settings, session_factory=session_factory)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
