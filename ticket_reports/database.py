"""Database engine and session factory construction."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ticket_reports.config import Settings
from ticket_reports.errors import DataStoreUnavailableError

SessionFactory = async_sessionmaker[AsyncSession]


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    options = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,
    }
    if not settings.database_url.startswith("sqlite"):
        options["pool_size"] = settings.DB_POOL_SIZE
        options["max_overflow"] = settings.DB_MAX_OVERFLOW
    return create_async_engine(settings.database_url, **options)


def create_session_factory(engine: AsyncEngine) -> SessionFactory:
    """Create a session factory bound to an engine.

    Reports only read, so sessions never flush and objects are not
    expired on commit.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def ping(session_factory: SessionFactory) -> None:
    """Check that the data store answers a trivial query.

    Raises:
        DataStoreUnavailableError: If the round trip fails
    """
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise DataStoreUnavailableError(f"Data store is unavailable: {e}") from e
