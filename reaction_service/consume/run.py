"""Main orchestration for the cascade consumer."""

from __future__ import annotations

from redis.asyncio import Redis

from reaction_service.config.settings import AppSettings, load_config
from reaction_service.consume.logger import logger
from reaction_service.consume.subscriber import ReactionSubscriber
from reaction_service.core import BaseService
from reaction_service.db.engine import dispose_engines


class ConsumeService(BaseService):
    """Cascades resource-removed stream entries into the reaction store."""

    def __init__(self, settings: AppSettings, redis: Redis | None = None) -> None:
        super().__init__(settings.database_url)
        self.settings = settings
        self.redis = redis if redis is not None else Redis.from_url(settings.redis_url)
        self.subscriber = ReactionSubscriber(
            self.redis,
            self.async_session,
            settings.topics,
            group=settings.consumer_group,
            consumer=settings.consumer_name,
        )

    async def _run(self) -> None:
        """Consume until cancelled, then release Redis and database connections."""
        logger.info(f"Listening on {len(self.settings.topics)} topics")
        try:
            await self.subscriber.run()
        finally:
            await self.redis.aclose()
            await dispose_engines()

    def _log_summary(self, elapsed: float) -> None:
        """Log the final consumer summary."""
        logger.summary(stats=self.subscriber.stats, elapsed=elapsed)


async def run_consumer(config_path: str = "config.json") -> None:
    """Entry point for running the cascade consumer."""
    settings = load_config(config_path)
    service = ConsumeService(settings)
    await service.run()
