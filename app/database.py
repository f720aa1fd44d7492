"""
ClearVision – Async SQLAlchemy engine, session factory, and declarative base.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

# ── Engine ──
engine_kwargs = {
    "echo": settings.DEBUG and settings.LOG_LEVEL.upper() == "DEBUG",
    "future": True,
}

# If using PostgreSQL behind PgBouncer (transaction mode), disable prepared
# statement caching.
if "postgresql" in settings.DATABASE_URL:
    engine_kwargs["connect_args"] = {"statement_cache_size": 0}

engine = create_async_engine(
    settings.DATABASE_URL,
    **engine_kwargs
)

# ── Session factory ──
async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


async def create_tables() -> None:
    """Create every table registered on ``Base.metadata``."""
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
