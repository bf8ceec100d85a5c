"""
User service — read-only queries for the User aggregate.

Users are created outside the API (seed data), so there is no write path.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFound
from app.models import User


def _user_to_dict(user: User) -> dict:
    return {
        "username": user.username,
        "name": user.name,
        "avatar_url": user.avatar_url,
    }


async def get_users(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(User).order_by(User.username))
    return [_user_to_dict(u) for u in result.scalars().all()]


async def get_user(db: AsyncSession, username: str) -> dict:
    """Return the user called *username*, or raise ``NotFound``."""
    user = await db.get(User, username)
    if user is None:
        raise NotFound("User doesn't exist")
    return _user_to_dict(user)
