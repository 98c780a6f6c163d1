from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from services.seed.app.settings import SETTINGS


def create_engine() -> AsyncEngine:
    return create_async_engine(SETTINGS.database_url, pool_pre_ping=True, pool_size=SETTINGS.pool_size)


async def get_engine() -> AsyncIterator[AsyncEngine]:
    # One engine per request; its pool is released whether the handler succeeds or fails.
    engine = create_engine()
    try:
        yield engine
    finally:
        await engine.dispose()
