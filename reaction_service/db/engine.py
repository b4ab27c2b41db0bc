"""Engines and session factories, cached per database URL.

The facade and the cascade consumer both go through get_async_session(),
so a process holds one pool per database no matter how many services
it builds.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

_engine_cache: dict[str, AsyncEngine] = {}


def get_engine(database_url: str) -> AsyncEngine:
    if database_url not in _engine_cache:
        # pre-ping drops connections PostgreSQL closed while idle
        _engine_cache[database_url] = create_async_engine(
            database_url, echo=False, pool_pre_ping=True
        )
    return _engine_cache[database_url]


@lru_cache(maxsize=8)
def get_async_session(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the cached engine for database_url.

    Sessions keep attributes loaded after commit, so reactions returned
    by the facade stay readable once their session is closed.
    """
    return async_sessionmaker(bind=get_engine(database_url), expire_on_commit=False)


async def dispose_engines() -> None:
    """Close every pooled connection; call once at shutdown."""
    for engine in _engine_cache.values():
        await engine.dispose()
    _engine_cache.clear()
    get_async_session.cache_clear()
