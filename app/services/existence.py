"""
Existence probes used as precondition gates by the compound operations.

Each ``assert_*`` issues one ``SELECT <key> ... LIMIT 1`` and raises
``NotFound`` with the entity's message when nothing comes back.  They never
write.  A probe and the write that follows it are separate statements, so a
row can still disappear in between; callers treat a write that affects no
row as ``NotFound`` too.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFound
from app.models import Article, Comment, Topic, User


async def _exists(db: AsyncSession, column, value) -> bool:
    result = await db.execute(select(column).where(column == value).limit(1))
    return result.scalar_one_or_none() is not None


async def assert_article_exists(db: AsyncSession, article_id: int) -> None:
    if not await _exists(db, Article.article_id, article_id):
        raise NotFound("Article doesn't exist")


async def assert_comment_exists(db: AsyncSession, comment_id: int) -> None:
    if not await _exists(db, Comment.comment_id, comment_id):
        raise NotFound("Comment doesn't exist")


async def assert_user_exists(db: AsyncSession, username: str) -> None:
    if not await _exists(db, User.username, username):
        raise NotFound("User doesn't exist")


async def assert_topic_exists(db: AsyncSession, slug: str) -> None:
    if not await _exists(db, Topic.slug, slug):
        raise NotFound("Topic doesn't exist")
