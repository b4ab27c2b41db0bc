"""Unit tests for reaction_service.db.engine."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from reaction_service.db import engine as engine_module

URL = "postgresql+asyncpg://test/db"


@pytest.fixture(autouse=True)
def clear_cache():
    engine_module._engine_cache.clear()
    engine_module.get_async_session.cache_clear()
    yield
    engine_module._engine_cache.clear()
    engine_module.get_async_session.cache_clear()


class TestGetEngine:
    """Tests for get_engine."""

    @patch("reaction_service.db.engine.create_async_engine")
    def test_caches_per_url(self, mock_create) -> None:
        first = engine_module.get_engine(URL)
        second = engine_module.get_engine(URL)

        assert first is second
        mock_create.assert_called_once_with(URL, echo=False, pool_pre_ping=True)


class TestGetAsyncSession:
    """Tests for get_async_session."""

    @patch("reaction_service.db.engine.async_sessionmaker")
    @patch("reaction_service.db.engine.create_async_engine")
    def test_binds_cached_engine(self, mock_create, mock_maker) -> None:
        factory = engine_module.get_async_session(URL)

        assert engine_module.get_async_session(URL) is factory
        mock_maker.assert_called_once_with(
            bind=mock_create.return_value, expire_on_commit=False
        )


class TestDisposeEngines:
    """Tests for dispose_engines."""

    @pytest.mark.asyncio
    async def test_disposes_and_clears(self) -> None:
        engine = MagicMock()
        engine.dispose = AsyncMock()
        engine_module._engine_cache[URL] = engine

        await engine_module.dispose_engines()

        engine.dispose.assert_awaited_once()
        assert engine_module._engine_cache == {}
