"""Redis Streams consumer driving the cascade handler.

Each topic is a stream read through a consumer group, with one task per
topic: entries on a topic are handled one at a time, different topics are
handled concurrently. An entry is acknowledged (XACK) only after the
handler has dealt with it, so events published while the consumer is down
or reconnecting wait in the stream, and entries whose cascade failed stay
pending and are read again.

Publishers append the JSON event under the ``data`` field:

    XADD commentService.comment.remove.succeeded * data '{"id": "..."}'
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError
from redis.exceptions import TimeoutError as RedisTimeoutError

from reaction_service.consume.cascade import CascadeOutcome, handle_resource_removed
from reaction_service.consume.logger import logger

if TYPE_CHECKING:
    from redis.asyncio import Redis
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Reconnect and retry backoff
INITIAL_BACKOFF = 1.0  # seconds
MAX_BACKOFF = 64.0  # seconds

READ_COUNT = 10
READ_BLOCK_MS = 5000
PAYLOAD_FIELD = "data"

# XREADGROUP ids: "0" re-reads this consumer's unacknowledged entries,
# ">" reads entries never delivered to the group.
PENDING = "0"
NEW = ">"

# (async_session, topic, payload) -> outcome
Handler = Callable[..., Awaitable[CascadeOutcome]]


def _field(fields: dict[Any, Any] | None, name: str) -> Any:
    # Keys are bytes unless the client decodes responses.
    # Trimmed entries come back from the pending list without fields.
    if not fields:
        return None
    return fields.get(name, fields.get(name.encode()))


@dataclass
class TopicStats:
    """Per-topic message counters."""

    received: int = 0
    cascaded: int = 0
    ignored: int = 0
    failed: int = 0

    def record(self, outcome: CascadeOutcome) -> None:
        self.received += 1
        if outcome is CascadeOutcome.CASCADED:
            self.cascaded += 1
        elif outcome is CascadeOutcome.IGNORED:
            self.ignored += 1
        else:
            self.failed += 1

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class ReactionSubscriber:
    """Consumes resource-removed streams and cascades deletes."""

    def __init__(
        self,
        redis: Redis,
        async_session: async_sessionmaker[AsyncSession],
        topics: list[str],
        group: str,
        consumer: str,
        handler: Handler = handle_resource_removed,
    ) -> None:
        self.redis = redis
        self.async_session = async_session
        self.topics = list(topics)
        self.group = group
        self.consumer = consumer
        self.handler = handler
        self.stats: dict[str, TopicStats] = {topic: TopicStats() for topic in self.topics}

    async def run(self) -> None:
        """Consume every topic until cancelled."""
        await asyncio.gather(*(self.consume(topic) for topic in self.topics))

    async def handle(
        self, topic: str, entry_id: Any, fields: dict[Any, Any] | None
    ) -> CascadeOutcome:
        """Handle one stream entry, acknowledging it unless the cascade failed."""
        outcome = await self.handler(
            self.async_session, topic, _field(fields, PAYLOAD_FIELD)
        )
        self.stats[topic].record(outcome)
        if outcome is not CascadeOutcome.FAILED:
            await self.redis.xack(topic, self.group, entry_id)
        return outcome

    async def ensure_group(self, topic: str) -> None:
        """Create the consumer group (and stream) unless it already exists.

        A new group starts at the beginning of the stream, so events
        published before the first deployment are still cascaded.
        """
        try:
            await self.redis.xgroup_create(topic, self.group, id="0", mkstream=True)
        except ResponseError as e:
            if "BUSYGROUP" not in str(e):
                raise

    async def read(self, topic: str, stream_id: str) -> list[tuple[Any, Any]]:
        response = await self.redis.xreadgroup(
            self.group,
            self.consumer,
            {topic: stream_id},
            count=READ_COUNT,
            block=READ_BLOCK_MS,
        )
        # [[stream, [(entry_id, fields), ...]]], or None when the block timed out
        return [entry for _, entries in response or [] for entry in entries]

    async def follow(self, topic: str) -> None:
        """Replay this consumer's pending entries, then follow new ones.

        A batch with a failed cascade sends the loop back to the pending
        entries after a growing delay, so the topic waits for the store to
        recover instead of acknowledging past the failure.
        """
        stream_id = PENDING
        retry_delay = INITIAL_BACKOFF

        while True:
            entries = await self.read(topic, stream_id)

            failed = False
            for entry_id, fields in entries:
                outcome = await self.handle(topic, entry_id, fields)
                failed = failed or outcome is CascadeOutcome.FAILED

            if failed:
                logger.retrying_pending(topic, retry_delay)
                await asyncio.sleep(retry_delay)
                retry_delay = min(retry_delay * 2, MAX_BACKOFF)
                stream_id = PENDING
                continue

            if entries:
                retry_delay = INITIAL_BACKOFF
            if stream_id != NEW:
                # Pending ids are walked forward so each is re-read once per pass
                stream_id = entries[-1][0] if entries else NEW

    async def consume(self, topic: str) -> None:
        """Consume a single topic, reconnecting with backoff if Redis drops."""
        backoff = INITIAL_BACKOFF

        while True:
            try:
                await self.ensure_group(topic)
                logger.subscribed(topic, self.group, self.consumer)
                backoff = INITIAL_BACKOFF
                await self.follow(topic)
            except (RedisConnectionError, RedisTimeoutError) as e:
                logger.reconnecting(topic, backoff, str(e) or e.__class__.__name__)
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, MAX_BACKOFF)
