"""Tests for settings loading."""

from conduit_accounts.config import Settings


def test_settings_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://app@db:5432/conduit")
    monkeypatch.setenv("DATABASE_POOL_SIZE", "20")

    settings = Settings()

    assert settings.database_url == "postgresql+asyncpg://app@db:5432/conduit"
    assert settings.database_pool_size == 20
    assert settings.database_max_overflow == 10
    assert settings.database_echo is False
