from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool, StaticPool
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the given URL.

    SQLite (used for local runs and tests) gets a single shared connection so an
    in-memory database survives across sessions.
    """
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False}
        )
    if settings.ENVIRONMENT == "test":
        return create_async_engine(url, echo=echo, pool_pre_ping=True, poolclass=NullPool)
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


# Async engine for application use
async_engine = build_engine(settings.async_database_url, echo=settings.DEBUG and settings.ENVIRONMENT != "test")

# Async session for application
AsyncSessionLocal = build_session_factory(async_engine)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables (development/test only - no migrations in this service)."""
    import app.modules.company.models  # noqa: F401
    import app.modules.parties.models  # noqa: F401
    import app.modules.invoices.models  # noqa: F401
    import app.modules.ledger.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

