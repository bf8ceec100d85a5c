"""
Rebuild the schema and load a dataset into it.

A dataset is any object (usually a module such as
``app.seeds.test_data``) exposing ``topics``, ``users``, ``articles`` and
``comments`` as lists of column dicts.  Rows are bulk-inserted table by
table in dependency order, so auto-incremented ids follow list order.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from app.database import Base
from app.models import Article, Comment, Topic, User

logger = logging.getLogger(__name__)


def _from_epoch_ms(rows: list[dict]) -> list[dict]:
    """Return copies of *rows* with ``created_at`` turned into UTC datetimes."""
    converted = []
    for row in rows:
        row = dict(row)
        if isinstance(row.get("created_at"), (int, float)):
            row["created_at"] = datetime.fromtimestamp(row["created_at"] / 1000, tz=timezone.utc)
        converted.append(row)
    return converted


async def seed(engine: AsyncEngine, data) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

        # Empty lists are skipped: an executemany with no parameter sets is
        # an INSERT of one all-defaults row.
        for model, rows in (
            (Topic, data.topics),
            (User, data.users),
            (Article, _from_epoch_ms(data.articles)),
            (Comment, _from_epoch_ms(data.comments)),
        ):
            if rows:
                await conn.execute(insert(model), rows)

    logger.info(
        "Seeded %d topics, %d users, %d articles, %d comments",
        len(data.topics), len(data.users), len(data.articles), len(data.comments),
    )
