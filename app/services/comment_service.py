"""
Comment service — queries and single-row writes for comments.

None of these functions check that the parent article, the author or the
comment itself exists; ``app.services.operations`` runs those probes first.
"""
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFound
from app.models import Comment

logger = logging.getLogger(__name__)


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "comment_id": comment.comment_id,
        "article_id": comment.article_id,
        "author": comment.author,
        "body": comment.body,
        "votes": comment.votes,
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
    }


async def list_comments_for_article(db: AsyncSession, article_id: int) -> list[dict]:
    """Return the article's comments, newest first (empty list when none)."""
    q = (
        select(Comment)
        .where(Comment.article_id == article_id)
        .order_by(Comment.created_at.desc())
    )
    result = await db.execute(q)
    return [_comment_to_dict(c) for c in result.scalars().all()]


async def insert_comment(db: AsyncSession, article_id: int, author: str, body: str) -> dict:
    """
    Insert one comment and return it with its server-assigned
    ``comment_id``, ``created_at`` and ``votes``.
    """
    comment = Comment(article_id=article_id, author=author, body=body)
    db.add(comment)
    await db.flush()
    await db.refresh(comment)

    logger.info("Comment %s added to article %s by %s", comment.comment_id, article_id, author)
    return _comment_to_dict(comment)


async def increment_votes(db: AsyncSession, comment_id: int, delta: int) -> dict:
    """
    Add *delta* to the comment's votes in one statement and return the row.

    Raises ``NotFound`` when the UPDATE matched nothing.
    """
    stmt = (
        update(Comment)
        .where(Comment.comment_id == comment_id)
        .values(votes=Comment.votes + delta)
        .returning(Comment)
        .execution_options(populate_existing=True)
    )
    comment = (await db.execute(stmt)).scalar_one_or_none()
    if comment is None:
        raise NotFound("Comment doesn't exist")

    logger.info("Comment %s votes %+d -> %d", comment_id, delta, comment.votes)
    return _comment_to_dict(comment)


async def remove_comment(db: AsyncSession, comment_id: int) -> None:
    """
    Delete exactly the comment identified by *comment_id*.

    Raises ``NotFound`` when no row was deleted.
    """
    result = await db.execute(delete(Comment).where(Comment.comment_id == comment_id))
    if result.rowcount == 0:
        raise NotFound("Comment doesn't exist")
    logger.info("Comment %s deleted", comment_id)
