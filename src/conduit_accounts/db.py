"""Async engine construction."""

import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from conduit_accounts.config import Settings

_logger = logging.getLogger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the shared connection pool for the configured database."""
    url = make_url(settings.database_url)
    engine_kwargs: dict[str, object] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
    }
    # SQLite uses a single-connection pool without sizing options.
    if url.get_backend_name() != "sqlite":
        engine_kwargs.update(
            {
                "pool_size": settings.database_pool_size,
                "max_overflow": settings.database_max_overflow,
                "pool_timeout": settings.database_pool_timeout,
                "pool_recycle": settings.database_pool_recycle,
            }
        )
    _logger.info(
        "Creating database engine: backend=%s host=%s database=%s",
        url.get_backend_name(),
        url.host,
        url.database,
    )
    return create_async_engine(url, **engine_kwargs)
