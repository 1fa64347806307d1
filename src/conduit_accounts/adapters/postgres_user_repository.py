"""Postgres-backed user repository."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import NoSuchColumnError
from sqlalchemy.ext.asyncio import AsyncEngine

from conduit_accounts.domain.errors import (
    AppUseCase,
    InvalidInputError,
    StorageError,
    storage_errors,
)
from conduit_accounts.domain.models import User, UserEntry, UserId, UserProfileDTO
from conduit_accounts.services.users import UserRepository

_logger = logging.getLogger(__name__)

_INSERT_ACCOUNT = text(
    "INSERT INTO accounts(email, username, password, salt) "
    "VALUES (:email, :username, :password, :salt) RETURNING id"
)
_SELECT_BY_EMAIL = text(
    "SELECT id, email, username, password, salt, bio, image "
    "FROM accounts WHERE email = :email"
)
_SELECT_BY_ID = text(
    "SELECT email, username, password, salt, bio, image FROM accounts WHERE id = :id"
)
_SELECT_PROFILE = text("SELECT id, bio, image FROM accounts WHERE username = :username")
_SELECT_FOLLOWINGS = text(
    "SELECT followed_user_id FROM followings WHERE user_id = :user_id"
)
_UPDATE_ACCOUNT = text(
    "UPDATE accounts SET email = :email, bio = :bio, image = :image WHERE id = :id"
)

_MISSING = object()


def _column(row: Mapping[str, Any], name: str, default: Any = _MISSING) -> Any:
    try:
        return row[name]
    except KeyError as err:
        if default is not _MISSING:
            return default
        raise NoSuchColumnError(
            f"Could not locate column in row for column '{name}'"
        ) from err


def user_from_row(row: Mapping[str, Any]) -> User:
    """Map a row carrying every user column to a User."""
    return User(
        id=_column(row, "id"),
        email=_column(row, "email"),
        username=_column(row, "username"),
        bio=_column(row, "bio"),
        image=_column(row, "image"),
    )


def user_entry_from_row(row: Mapping[str, Any]) -> UserEntry:
    """Map an accounts row to a UserEntry.

    ``id`` and ``image`` fall back to 0 and None when the query did not
    select them; every other column is required.
    """
    return UserEntry(
        user=User(
            id=_column(row, "id", 0),
            email=_column(row, "email"),
            username=_column(row, "username"),
            bio=_column(row, "bio"),
            image=_column(row, "image", None),
        ),
        password=_column(row, "password"),
        salt=_column(row, "salt"),
    )


@dataclass
class PostgresUserRepository(UserRepository):
    """SQL implementation for account persistence over a shared async engine."""

    engine: AsyncEngine

    async def save(self, user: User, password: str, salt: str) -> int:
        """Insert a new account row and return the generated id."""
        with storage_errors(AppUseCase.USER_REGISTER):
            async with self.engine.begin() as conn:
                result = await conn.execute(
                    _INSERT_ACCOUNT,
                    {
                        "email": user.email,
                        "username": user.username,
                        "password": password,
                        "salt": salt,
                    },
                )
                user_id = result.scalar_one()
        _logger.info("Registered account: id=%s username=%s", user_id, user.username)
        return user_id

    async def get_by_email(self, email: str, usecase: AppUseCase) -> UserEntry:
        """Return the account matching an email exactly."""
        with storage_errors(usecase):
            async with self.engine.connect() as conn:
                result = await conn.execute(_SELECT_BY_EMAIL, {"email": email})
                return user_entry_from_row(result.mappings().one())

    async def get_by_id(self, id: UserId, usecase: AppUseCase) -> UserEntry:
        """Return the account for an id.

        The id column is not selected, so the returned entry's ``user.id`` is 0.
        """
        with storage_errors(usecase):
            async with self.engine.connect() as conn:
                result = await conn.execute(_SELECT_BY_ID, {"id": id.as_value()})
                return user_entry_from_row(result.mappings().one())

    async def get_profile_by_username(
        self, username: str, usecase: AppUseCase
    ) -> UserProfileDTO:
        """Return the profile for a username along with the ids it follows.

        A failed followings lookup leaves ``following`` as None.
        """
        with storage_errors(usecase):
            async with self.engine.connect() as conn:
                result = await conn.execute(_SELECT_PROFILE, {"username": username})
                row = result.mappings().one()
                user_id = _column(row, "id")
                bio = _column(row, "bio")
                image = _column(row, "image")

        following: list[UserId] | None = None
        try:
            following = await self.get_followings(user_id)
        except StorageError:
            _logger.warning(
                "Followings lookup failed: user_id=%s", user_id, exc_info=True
            )
        return UserProfileDTO(
            username=username, bio=bio, image=image, following=following
        )

    async def get_followings(self, user_id: int) -> list[UserId]:
        """Return the ids followed by a user."""
        with storage_errors(AppUseCase.GET_USER_PROFILE):
            async with self.engine.connect() as conn:
                result = await conn.execute(_SELECT_FOLLOWINGS, {"user_id": user_id})
                return [
                    UserId.from_value(_column(row, "followed_user_id"))
                    for row in result.mappings().all()
                ]

    async def update_by_id(
        self,
        id: UserId,
        email: str | None = None,
        bio: str | None = None,
        image: str | None = None,
    ) -> UserEntry:
        """Overlay the given fields on an account and write them back.

        Returns the in-memory entry; it is not re-read after the write.
        """
        if email is None and bio is None and image is None:
            raise InvalidInputError("nothing to update")

        entry = await self.get_by_id(id, AppUseCase.UPDATE_USER)
        if email is not None:
            entry.user.email = email
        if bio is not None:
            entry.user.bio = bio
        if image is not None:
            entry.user.image = image

        with storage_errors(AppUseCase.UPDATE_USER):
            async with self.engine.begin() as conn:
                await conn.execute(
                    _UPDATE_ACCOUNT,
                    {
                        "email": entry.user.email,
                        "bio": entry.user.bio,
                        "image": entry.user.image,
                        "id": id.as_value(),
                    },
                )
        _logger.info("Updated account: id=%s", id.as_value())
        return entry
