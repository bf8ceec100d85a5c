import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Per-request query counter
# ---------------------------------------------------------------------------


class QueryCounter:
    """Mutable tally shared by every task spawned while serving one request."""

    def __init__(self) -> None:
        self.value = 0


# Holds an object rather than an int so that increments made inside tasks
# started with ``asyncio.gather`` (which run in copied contexts) are still
# visible to the middleware.
query_counter_var: ContextVar[QueryCounter | None] = ContextVar("query_counter", default=None)


def install_query_counter(engine) -> None:
    """
    Register a ``before_cursor_execute`` listener on *engine* that bumps the
    current request's ``QueryCounter`` for every SQL statement.

    Must be called once per engine (see ``app.database.build_engine``).
    """
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        counter = query_counter_var.get()
        if counter is not None:
            counter.value += 1


# ---------------------------------------------------------------------------
# Middleware (pure ASGI — avoids BaseHTTPMiddleware ContextVar isolation)
# ---------------------------------------------------------------------------

class TimingMiddleware:
    """
    Pure ASGI middleware that adds two diagnostic response headers:

    - ``X-Response-Time-Ms``: wall-clock time for the entire request.
    - ``X-Query-Count``: SQL statements executed while serving the request.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        counter = QueryCounter()
        token = query_counter_var.set(counter)
        start = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                headers.append((b"x-query-count", str(counter.value).encode()))
                message["headers"] = headers
                logger.debug(
                    "%s %s -> %s in %sms (%d queries)",
                    scope["method"], scope["path"], message["status"], duration_ms, counter.value,
                )
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            query_counter_var.reset(token)
