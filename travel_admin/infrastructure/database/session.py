"""SQLAlchemy async engine and session factory configuration."""

from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from travel_admin.config import Settings
from travel_admin.infrastructure.database.base import Base


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def create_engine_and_factory(
    settings: Settings,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Build the async engine and a session factory for ``settings.database_url``."""
    async_url = _get_async_url(settings.database_url)
    options: dict = {"echo": settings.app_env == "development", "future": True}
    if async_url.startswith("sqlite+aiosqlite://") and ":memory:" in async_url:
        # An in-memory database lives only as long as its single connection.
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    elif async_url.startswith("sqlite+aiosqlite:///"):
        Path(async_url.removeprefix("sqlite+aiosqlite:///")).parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(async_url, **options)
    factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return engine, factory


async def init_database(engine: AsyncEngine) -> None:
    """Create the tables if they do not exist."""
    import travel_admin.infrastructure.database.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
