"""Application error taxonomy for the accounts layer."""

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

UNIQUE_VIOLATION = "23505"


class AppUseCase(Enum):
    """High-level operation an error occurred during."""

    USER_REGISTER = "user registration"
    USER_LOGIN = "user login"
    GET_CURRENT_USER = "get current user"
    GET_USER_PROFILE = "get user profile"
    UPDATE_USER = "update user"
    FOLLOW_USER = "follow user"
    UNFOLLOW_USER = "unfollow user"


class AppError(Exception):
    """Base class for errors surfaced by the accounts layer."""


class InvalidInputError(AppError):
    """Raised when a request carries nothing usable, before any I/O."""

    def __init__(self, message: str = "invalid input") -> None:
        super().__init__(message)


class StorageError(AppError):
    """A storage failure tagged with the use case that was attempted."""

    def __init__(self, cause: SQLAlchemyError, usecase: AppUseCase) -> None:
        super().__init__(f"{usecase.value} failed: {cause}")
        self.cause = cause
        self.usecase = usecase

    @classmethod
    def from_driver(cls, err: SQLAlchemyError, usecase: AppUseCase) -> "StorageError":
        return cls(err, usecase)

    @property
    def code(self) -> str | None:
        """SQLSTATE reported by the driver, if it reports one."""
        orig = getattr(self.cause, "orig", None)
        if orig is None:
            return None
        for attr in ("sqlstate", "pgcode"):
            value = getattr(orig, attr, None)
            if value:
                return str(value)
        return None

    @property
    def is_not_found(self) -> bool:
        return isinstance(self.cause, NoResultFound)

    @property
    def is_unique_violation(self) -> bool:
        if not isinstance(self.cause, IntegrityError):
            return False
        code = self.code
        if code is not None:
            return code == UNIQUE_VIOLATION
        return "unique" in str(self.cause.orig).lower()


@contextmanager
def storage_errors(usecase: AppUseCase) -> Iterator[None]:
    """Translate SQLAlchemy failures raised inside the block into StorageError."""
    try:
        yield
    except SQLAlchemyError as err:
        raise StorageError.from_driver(err, usecase) from err
