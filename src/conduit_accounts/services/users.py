"""User persistence port."""

from typing import Protocol

from conduit_accounts.domain.errors import AppUseCase
from conduit_accounts.domain.models import User, UserEntry, UserId, UserProfileDTO


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    async def save(self, user: User, password: str, salt: str) -> int:
        """Insert a new account and return its generated id."""

    async def get_by_email(self, email: str, usecase: AppUseCase) -> UserEntry:
        """Return the account with the given email."""

    async def get_by_id(self, id: UserId, usecase: AppUseCase) -> UserEntry:
        """Return the account with the given id."""

    async def get_profile_by_username(
        self, username: str, usecase: AppUseCase
    ) -> UserProfileDTO:
        """Return the public profile for a username."""

    async def get_followings(self, user_id: int) -> list[UserId]:
        """Return the ids followed by a user."""

    async def update_by_id(
        self,
        id: UserId,
        email: str | None = None,
        bio: str | None = None,
        image: str | None = None,
    ) -> UserEntry:
        """Apply the given fields to an account and return the updated entry."""
