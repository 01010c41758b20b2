"""Async database engine and session factory."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from examprep.core.config import settings


def create_db_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine (defaults from settings)."""
    url = url or settings.DATABASE_URL
    kwargs = {
        "echo": settings.DATABASE_ECHO if echo is None else echo,
    }
    # SQLite has no server-side pool to verify
    if not url.startswith("sqlite"):
        kwargs.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to an engine; one session per store query."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevent lazy loading issues
    )
