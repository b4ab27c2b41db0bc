"""Base service for long-running reaction service processes.

Provides common infrastructure:
- Database engine and session management
- Table initialization
- Timing around the run() interface

Usage:
    class MyService(BaseService):
        async def _run(self):
            # Implementation
            pass

        def _log_summary(self, elapsed):
            # Log final statistics
            pass
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from reaction_service.db.engine import get_async_session, get_engine
from reaction_service.db.models import Base

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


class BaseService(ABC):
    """Abstract base class for service processes.

    Subclasses must implement:
    - _run(): The actual service logic
    - _log_summary(): Log final statistics
    """

    def __init__(self, database_url: str) -> None:
        """Initialize the service.

        Args:
            database_url: Database connection URL.
        """
        self.database_url = database_url
        self.engine: AsyncEngine = get_engine(database_url)
        self.async_session: async_sessionmaker[AsyncSession] = get_async_session(
            database_url
        )
        self.start_time: float = 0.0

    async def init_db(self) -> None:
        """Create tables (and the reaction unique constraint) if missing."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def run(self) -> None:
        """Run the service until _run() returns, then log a summary."""
        self.start_time = time.time()

        await self.init_db()
        try:
            await self._run()
        finally:
            elapsed = time.time() - self.start_time
            self._log_summary(elapsed)

    @abstractmethod
    async def _run(self) -> None:
        """Execute the service logic."""
        ...

    @abstractmethod
    def _log_summary(self, elapsed: float) -> None:
        """Log the final summary statistics.

        Args:
            elapsed: Total time elapsed in seconds.
        """
        ...
