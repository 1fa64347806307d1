"""Table definitions for the accounts schema."""

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncEngine

metadata = sa.MetaData()

# SQLite only autoincrements INTEGER primary keys.
_ID_TYPE = sa.BigInteger().with_variant(sa.Integer(), "sqlite")

accounts = sa.Table(
    "accounts",
    metadata,
    sa.Column("id", _ID_TYPE, primary_key=True, autoincrement=True),
    sa.Column("email", sa.Text(), nullable=False, unique=True),
    sa.Column("username", sa.Text(), nullable=False, unique=True),
    sa.Column("password", sa.Text(), nullable=False),
    sa.Column("salt", sa.Text(), nullable=False),
    sa.Column("bio", sa.Text(), nullable=False, server_default=""),
    sa.Column("image", sa.Text(), nullable=True),
)

followings = sa.Table(
    "followings",
    metadata,
    sa.Column(
        "user_id", _ID_TYPE, sa.ForeignKey("accounts.id"), primary_key=True
    ),
    sa.Column(
        "followed_user_id", _ID_TYPE, sa.ForeignKey("accounts.id"), primary_key=True
    ),
)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the accounts and followings tables if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
