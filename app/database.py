from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.middleware import install_query_counter


class Base(DeclarativeBase):
    pass


def build_engine(url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """
    Create an async engine for *url* with the per-request SQL query counter
    already registered on it.

    Called once from the application lifespan (production) and once per
    test from ``conftest.py``.
    """
    engine = create_async_engine(url, echo=echo, pool_pre_ping=True, **kwargs)
    install_query_counter(engine)
    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def get_sessionmaker(request: Request) -> async_sessionmaker[AsyncSession]:
    """Return the session factory the lifespan stored on ``app.state``."""
    return request.app.state.sessionmaker


async def get_db(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> AsyncIterator[AsyncSession]:
    async with sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
