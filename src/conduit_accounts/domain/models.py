"""Domain models for user accounts."""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_serializer


@dataclass(frozen=True)
class UserId:
    """The public id of a user."""

    value: int = 0

    @classmethod
    def from_value(cls, value: int) -> "UserId":
        return cls(value)

    def as_value(self) -> int:
        return self.value


@dataclass
class User:
    """The main representation of a user, without credentials."""

    id: int
    email: str
    username: str
    bio: str
    image: str | None = None


@dataclass
class UserEntry:
    """All user attributes persisted in the accounts table."""

    user: User
    password: str
    salt: str

    def to_user(self) -> User:
        """Return the user without its credential fields."""
        return self.user


class UserProfile(BaseModel):
    """Public view of a user, relative to the viewing user."""

    user_id: int = Field(exclude=True)
    username: str
    bio: str
    image: str | None = None
    following: bool = False

    @classmethod
    def new_basic(cls, user_id: int) -> "UserProfile":
        """Return a placeholder profile for a user id."""
        return cls(user_id=user_id, username="", bio="")


class UserProfileDTO(BaseModel):
    """Profile returned by a username lookup."""

    username: str
    bio: str
    image: str | None = None
    following: list[UserId] | None = None

    @field_serializer("following")
    def _serialize_following(self, following: list[UserId] | None) -> list[int] | None:
        if following is None:
            return None
        return [user_id.as_value() for user_id in following]
