"""Database session management."""

from functools import lru_cache

import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import settings
from core.exceptions import BackendError

logger = structlog.get_logger()


def warn_if_unconfigured() -> bool:
    """Log a warning when the backend endpoint or key is missing.

    Not fatal: the app still starts and requests fail later.
    """
    if settings.backend_configured:
        return True
    logger.warning(
        "backend_not_configured",
        database_url_set=bool(settings.database_url),
        database_key_set=bool(settings.database_key),
    )
    return False


@lru_cache
def get_engine() -> AsyncEngine:
    """Create the async engine on first use."""
    if not settings.database_url:
        raise BackendError("Backend is not configured: set DATABASE_URL and DATABASE_KEY")

    url = make_url(settings.async_database_url)
    if settings.database_key:
        url = url.set(password=settings.database_key)

    # Supabase uses Supavisor (connection pooler) in transaction mode.
    # asyncpg's prepared statement cache is incompatible with transaction-mode
    # pooling, so we disable it when connecting through the pooler.
    connect_args: dict = {}
    if url.host and "pooler.supabase.com" in url.host:
        connect_args["statement_cache_size"] = 0

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Create the async session factory bound to the engine."""
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
