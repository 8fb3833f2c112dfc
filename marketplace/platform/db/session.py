from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from marketplace.platform.config import settings
from marketplace.platform.db.base import Base


def build_engine(database_url: str) -> AsyncEngine:
    # SQLite connections are bound to the event loop that opened them, so they
    # are never pooled.
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=False, future=True, poolclass=NullPool)

    return create_async_engine(
        database_url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_recycle=1800,
        pool_size=20,
        max_overflow=30,  # (burst capacity)
        pool_timeout=30,
    )


engine = build_engine(settings.DATABASE_URL)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False, autocommit=False)


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create the users, sessions and verification_codes tables if missing."""
    from marketplace.features.auth import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    async with SessionLocal() as session:
        yield session
