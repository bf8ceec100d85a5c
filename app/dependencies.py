from typing import Annotated

from fastapi import Path, Query

from app.config import settings
from app.schemas import INT32_MAX

# Path key of an article or comment.  Out-of-range values fail request
# validation (400) instead of reaching the driver.
ResourceId = Annotated[int, Path(ge=-INT32_MAX - 1, le=INT32_MAX)]


class ArticleQueryParams:
    """
    Reusable FastAPI dependency that collects the filtering / sorting query
    parameters of ``GET /api/articles``.

    Values are passed through as raw strings: the article service owns the
    allow-lists and rejects anything outside them with a 400, which a
    ``pattern=`` constraint here could not express with the right message.

    Attributes
    ----------
    topic:
        Topic slug to filter by, or ``None`` for every topic.
    sort_by:
        One of ``title``, ``author``, ``created_at``, ``votes``
        (case-insensitive).
    order_by:
        ``asc`` or ``desc`` (case-insensitive).
    """

    def __init__(
        self,
        topic: str | None = Query(
            None,
            description="Only return articles about this topic slug.",
        ),
        sort_by: str = Query(
            settings.DEFAULT_SORT_BY,
            description="Column to sort by: title, author, created_at or votes.",
        ),
        order_by: str = Query(
            settings.DEFAULT_ORDER_BY,
            description="Sort direction: 'asc' or 'desc'.",
        ),
    ) -> None:
        self.topic = topic
        self.sort_by = sort_by
        self.order_by = order_by
