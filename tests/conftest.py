"""
Test infrastructure for the News API.

Strategy
--------
- SQLite via aiosqlite eliminates the need for a running Postgres instance
  in CI, keeping the suite fast and self-contained.
- Each test gets its own database file under ``tmp_path``.  A file (rather
  than ``:memory:``) lets every session open its own connection, so the
  concurrent probe + listing in ``fetch_comments_for_article`` really runs
  on two connections, as it does against Postgres.
- The schema is rebuilt and the fixture dataset in ``app.seeds.test_data``
  loaded before every test, giving each test the same known rows
  (article 1 has 100 votes and 11 comments, article 7 has none, topic
  ``paper`` has no articles, ...).
- The app's ``get_sessionmaker`` dependency is overridden so every test-time
  request uses the per-test session factory; the lifespan (which would
  connect to the configured DATABASE_URL) is never run by ASGITransport.
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import build_engine, build_sessionmaker, get_sessionmaker
from app.main import app
from app.seeds import test_data
from app.seeds.seed import seed


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine(tmp_path):
    """A seeded SQLite engine private to the current test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'news.db'}")
    await seed(engine, test_data)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sessions(engine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(engine)


@pytest_asyncio.fixture
async def db_session(sessions) -> AsyncSession:
    """
    Yield a live AsyncSession for tests that call services directly.
    Nothing is committed; writes are visible only within this session.
    """
    async with sessions() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(sessions) -> AsyncClient:
    """
    Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport,
    with requests served from the per-test database.
    """
    app.dependency_overrides[get_sessionmaker] = lambda: sessions
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
