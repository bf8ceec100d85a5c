"""
Article service — read queries and vote updates for the Article aggregate.

Design notes
------------
- ``comment_count`` is never stored: every read that returns it LEFT JOINs
  comments and groups by ``article_id``, so the count is live for the
  duration of one query.
- Sorting is driven by ``ArticleSortField`` / ``SortDirection``.  Raw
  ``sort_by`` / ``order_by`` strings are parsed into those enums before any
  SQL is built, and only the mapped column objects ever reach the query.
- Vote changes are a single ``UPDATE ... SET votes = votes + :delta``
  statement; nothing is read back into Python and written again.
- Service functions do not commit; the transaction boundary is owned by the
  ``get_db`` dependency in the router layer.
"""
import logging
from datetime import datetime
from enum import Enum

from sqlalchemy import asc, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFound, ValidationFailed
from app.models import Article, Comment
from app.services.existence import assert_topic_exists

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Sort allow-lists
# ---------------------------------------------------------------------------

class ArticleSortField(str, Enum):
    TITLE = "title"
    AUTHOR = "author"
    CREATED_AT = "created_at"
    VOTES = "votes"

    @property
    def column(self):
        return _SORT_COLUMNS[self]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


_SORT_COLUMNS = {
    ArticleSortField.TITLE: Article.title,
    ArticleSortField.AUTHOR: Article.author,
    ArticleSortField.CREATED_AT: Article.created_at,
    ArticleSortField.VOTES: Article.votes,
}


def parse_sort_field(value: str) -> ArticleSortField:
    """Return the sort field named by *value* (case-insensitive)."""
    try:
        return ArticleSortField(value.lower())
    except ValueError:
        raise ValidationFailed("Invalid sort query") from None


def parse_sort_direction(value: str) -> SortDirection:
    """Return the direction named by *value* (case-insensitive)."""
    try:
        return SortDirection(value.lower())
    except ValueError:
        raise ValidationFailed("Invalid order query") from None


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _article_summary_to_dict(row) -> dict:
    """Serialise a list-view row (no body) to a plain dict."""
    return {
        "article_id": row.article_id,
        "title": row.title,
        "topic": row.topic,
        "author": row.author,
        "created_at": _isoformat(row.created_at),
        "votes": row.votes,
        "article_img_url": row.article_img_url,
        "comment_count": row.comment_count,
    }


def _article_to_dict(article: Article) -> dict:
    """Serialise an Article ORM instance as stored."""
    return {
        "article_id": article.article_id,
        "title": article.title,
        "topic": article.topic,
        "author": article.author,
        "body": article.body,
        "created_at": _isoformat(article.created_at),
        "votes": article.votes,
        "article_img_url": article.article_img_url,
    }


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

_comment_count = func.count(Comment.comment_id).label("comment_count")


async def list_articles(
    db: AsyncSession,
    topic: str | None = None,
    sort_by: str = "created_at",
    order_by: str = "desc",
) -> list[dict]:
    """
    Return every article (without ``body``) with its ``comment_count``.

    *sort_by* and *order_by* are validated against their allow-lists before
    anything touches the database.  When *topic* is given it must name an
    existing topic; a topic with no articles yields an empty list.
    """
    sort_field = parse_sort_field(sort_by)
    direction = parse_sort_direction(order_by)

    if topic is not None:
        await assert_topic_exists(db, topic)

    order_expr = desc(sort_field.column) if direction is SortDirection.DESC else asc(sort_field.column)

    q = (
        select(
            Article.article_id,
            Article.title,
            Article.topic,
            Article.author,
            Article.created_at,
            Article.votes,
            Article.article_img_url,
            _comment_count,
        )
        .outerjoin(Comment, Comment.article_id == Article.article_id)
        .group_by(Article.article_id)
        .order_by(order_expr)
    )
    if topic is not None:
        q = q.where(Article.topic == topic)

    result = await db.execute(q)
    return [_article_summary_to_dict(row) for row in result.all()]


async def get_article(db: AsyncSession, article_id: int) -> dict:
    """
    Return the full article (including ``body``) with its ``comment_count``.

    Raises ``NotFound`` when no article has *article_id*.
    """
    q = (
        select(Article, _comment_count)
        .outerjoin(Comment, Comment.article_id == Article.article_id)
        .where(Article.article_id == article_id)
        .group_by(Article.article_id)
    )
    row = (await db.execute(q)).one_or_none()
    if row is None:
        raise NotFound("Article doesn't exist")

    article, comment_count = row
    data = _article_to_dict(article)
    data["comment_count"] = comment_count
    return data


async def increment_votes(db: AsyncSession, article_id: int, delta: int) -> dict:
    """
    Add *delta* (possibly negative or zero) to the article's votes and
    return the updated row.

    Raises ``NotFound`` when the UPDATE matched nothing.
    """
    stmt = (
        update(Article)
        .where(Article.article_id == article_id)
        .values(votes=Article.votes + delta)
        .returning(Article)
        .execution_options(populate_existing=True)
    )
    article = (await db.execute(stmt)).scalar_one_or_none()
    if article is None:
        raise NotFound("Article doesn't exist")

    logger.info("Article %s votes %+d -> %d", article_id, delta, article.votes)
    return _article_to_dict(article)
