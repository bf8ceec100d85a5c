"""
Compound operations — preconditions first, then the primary read/write.

Every operation here moves through the same states: it validates its input
and probes the rows it depends on, and only when all of that succeeds does
it execute the read or write it exists for.  The first failing check ends
the request with that check's error; nothing is retried.

Steps with a data dependency (probe, then write) run one after the other on
the request's session.  ``fetch_comments_for_article`` is the exception: the
article probe and the comment listing do not depend on each other, so they
run concurrently on sessions of their own.
"""
import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.exceptions import NotFound, ValidationFailed
from app.schemas import CommentCreate
from app.services import article_service, comment_service
from app.services.existence import (
    assert_article_exists,
    assert_comment_exists,
    assert_user_exists,
)


async def fetch_article(db: AsyncSession, article_id: int) -> dict:
    await assert_article_exists(db, article_id)
    return await article_service.get_article(db, article_id)


async def fetch_comments_for_article(
    sessions: async_sessionmaker[AsyncSession], article_id: int
) -> list[dict]:
    """
    Return the article's comments, or raise ``NotFound`` if the article is
    missing, whatever the listing itself produced.

    Both coroutines always run to completion; a failed probe simply
    discards the listing's result.
    """
    async def probe() -> None:
        async with sessions() as db:
            await assert_article_exists(db, article_id)

    async def listing() -> list[dict]:
        async with sessions() as db:
            return await comment_service.list_comments_for_article(db, article_id)

    probed, comments = await asyncio.gather(probe(), listing(), return_exceptions=True)
    if isinstance(probed, BaseException):
        raise probed
    if isinstance(comments, BaseException):
        raise comments
    return comments


async def create_comment(db: AsyncSession, article_id: int, data: CommentCreate) -> dict:
    """
    Post a comment on *article_id* as ``data.username``.

    Checks, in order: both fields non-empty, the author is a registered
    user, the article exists.  The INSERT is attempted only after all three
    pass.
    """
    if not data.username.strip() or not data.body.strip():
        raise ValidationFailed("Field cannot be empty!")

    try:
        await assert_user_exists(db, data.username)
    except NotFound:
        raise ValidationFailed("Invalid username") from None

    await assert_article_exists(db, article_id)

    return await comment_service.insert_comment(db, article_id, data.username, data.body)


async def update_article_votes(db: AsyncSession, article_id: int, delta: int) -> dict:
    await assert_article_exists(db, article_id)
    return await article_service.increment_votes(db, article_id, delta)


async def update_comment_votes(db: AsyncSession, comment_id: int, delta: int) -> dict:
    await assert_comment_exists(db, comment_id)
    return await comment_service.increment_votes(db, comment_id, delta)


async def delete_comment(db: AsyncSession, comment_id: int) -> None:
    await assert_comment_exists(db, comment_id)
    await comment_service.remove_comment(db, comment_id)
