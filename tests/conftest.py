"""Shared fixtures for reaction-service tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def session() -> AsyncMock:
    """Mocked AsyncSession; set execute/scalars return values per test."""
    return AsyncMock()


@pytest.fixture
def session_factory(session: AsyncMock) -> MagicMock:
    """async_sessionmaker stand-in yielding the mocked session."""
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


@pytest.fixture
def reaction_payload() -> dict:
    """A valid reaction as sent by the transport layer (camelCase keys)."""
    return {
        "resource": "5c1a2b3c4d5e6f7a8b9c0d1e",
        "resourceType": "COMMENT",
        "user": "alice@example.com",
        "type": "LIKE",
    }
