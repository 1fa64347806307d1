"""Shared test fixtures."""

import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from sqlalchemy.exc import MultipleResultsFound, NoResultFound

from conduit_accounts.adapters.postgres_user_repository import PostgresUserRepository
from conduit_accounts.config import Settings


@dataclass
class FakeResult:
    """Subset of the SQLAlchemy result API used by the repository."""

    rows: list[dict[str, object]]

    def mappings(self) -> "FakeResult":
        return self

    def one(self) -> dict[str, object]:
        if not self.rows:
            raise NoResultFound("No row was found when one was required")
        if len(self.rows) > 1:
            raise MultipleResultsFound("Multiple rows were found when one was required")
        return self.rows[0]

    def all(self) -> list[dict[str, object]]:
        return list(self.rows)

    def scalar_one(self) -> object:
        return next(iter(self.one().values()))


@dataclass
class FakeConnection:
    engine: "FakeEngine"

    async def execute(self, statement, params=None) -> FakeResult:  # type: ignore[no-untyped-def]
        sql = str(statement)
        self.engine.executed.append((sql, dict(params or {})))
        for fragment, error in self.engine.failures.items():
            if fragment in sql:
                raise error
        rows = self.engine.results.pop(0) if self.engine.results else []
        return FakeResult(rows)


@dataclass
class FakeEngine:
    """Fake async engine that records statements and replays queued rows."""

    results: list[list[dict[str, object]]] = field(default_factory=list)
    failures: dict[str, Exception] = field(default_factory=dict)
    executed: list[tuple[str, dict[str, object]]] = field(default_factory=list)
    transactions: int = 0

    def queue(self, rows: list[dict[str, object]]) -> None:
        self.results.append(rows)

    def fail_on(self, fragment: str, error: Exception) -> None:
        self.failures[fragment] = error

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[FakeConnection]:
        yield FakeConnection(self)

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[FakeConnection]:
        self.transactions += 1
        yield FakeConnection(self)


def account_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": 7,
        "email": "eve@example.com",
        "username": "eve",
        "password": "hashed123",
        "salt": "s1",
        "bio": "",
        "image": None,
    }
    row.update(overrides)
    return row


@pytest.fixture(autouse=True)
def reset_app_logger() -> Iterator[None]:
    logger = logging.getLogger("conduit_accounts")
    yield
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def repository(fake_engine: FakeEngine) -> PostgresUserRepository:
    return PostgresUserRepository(fake_engine)  # type: ignore[arg-type]


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'accounts.db'}"


@pytest.fixture
def settings(sqlite_url: str) -> Settings:
    return Settings(database_url=sqlite_url)
