"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from conduit_accounts.adapters.postgres_user_repository import PostgresUserRepository
from conduit_accounts.app_logging import configure_logging
from conduit_accounts.config import Settings
from conduit_accounts.db import create_engine
from conduit_accounts.services.users import UserRepository


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    engine: AsyncEngine
    user_repository: UserRepository
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    engine = create_engine(resolved_settings)
    user_repository = PostgresUserRepository(engine)

    async def close_resources() -> None:
        await engine.dispose()

    return AppContainer(
        settings=resolved_settings,
        engine=engine,
        user_repository=user_repository,
        close_resources=close_resources,
    )
