"""SQLAlchemy async engine pool and session management.

Provides a factory for creating async engines backed by asyncpg,
an async context manager for scoped sessions, and lifecycle helpers
for schema creation and graceful shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from .models import Base

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level singleton (set via ``init_engine``)
# ---------------------------------------------------------------------------
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_engine(
    url: str,
    *,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: int = 30,
    pool_recycle: int = 1800,
    echo: bool = False,
    use_null_pool: bool = False,
) -> AsyncEngine:
    """Create and return a new SQLAlchemy :class:`AsyncEngine`.

    Args:
        url: Database connection URL (``postgresql+asyncpg://`` scheme).
        pool_size: Number of persistent connections to keep in the pool.
        max_overflow: Maximum additional connections beyond *pool_size*.
        pool_timeout: Seconds to wait for a pooled connection.
        pool_recycle: Seconds after which a connection is recycled.
        echo: If ``True``, log all emitted SQL statements.
        use_null_pool: If ``True``, disable connection pooling entirely.
            Useful in short-lived processes (CLI, tests).
    """
    pool_kwargs: dict = {}
    if use_null_pool:
        pool_kwargs["poolclass"] = NullPool
    else:
        pool_kwargs.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            pool_recycle=pool_recycle,
        )

    engine = create_async_engine(url, echo=echo, **pool_kwargs)
    logger.info("Created async engine for %s (pool_size=%s)", url.split("@")[-1], pool_size)
    return engine


async def init_engine(
    url: str,
    *,
    pool_size: int = 5,
    max_overflow: int = 10,
    echo: bool = False,
    use_null_pool: bool = False,
    create_tables: bool = False,
) -> async_sessionmaker[AsyncSession]:
    """Initialise the module-level engine and return its session factory.

    Args:
        create_tables: If ``True``, run ``CREATE TABLE IF NOT EXISTS`` for
            all ORM models on startup (useful for dev/test).
    """
    global _engine, _session_factory  # noqa: PLW0603

    _engine = create_engine(
        url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        echo=echo,
        use_null_pool=use_null_pool,
    )
    _session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    if create_tables:
        await create_all(_engine)

    return _session_factory


async def create_all(engine: AsyncEngine | None = None) -> None:
    """Create all tables defined in the ORM metadata.

    Raises:
        RuntimeError: If no engine is available.
    """
    eng = engine or _engine
    if eng is None:
        raise RuntimeError(
            "No engine available. Call init_engine() first or pass an engine."
        )

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created / verified.")


async def dispose() -> None:
    """Dispose of the module-level engine and release pooled connections."""
    global _engine, _session_factory  # noqa: PLW0603

    if _engine is not None:
        await _engine.dispose()
        logger.info("Engine disposed.")
        _engine = None
        _session_factory = None


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Yield a session that commits on success and rolls back on error.

    Usage::

        async with session_scope() as session:
            session.add(record)

    Raises:
        RuntimeError: If no factory is passed and :func:`init_engine`
            has not been called.
    """
    factory = factory or _session_factory
    if factory is None:
        raise RuntimeError(
            "Session factory not initialised. Call init_engine() first."
        )

    session = factory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
