"""Rich-based logging for the cascade consumer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from reaction_service.utils.service_logger import BaseServiceLogger

if TYPE_CHECKING:
    from reaction_service.consume.subscriber import TopicStats


def _describe(resources: list[str]) -> str:
    if len(resources) == 1:
        return resources[0]
    return f"{len(resources)} resources"


class ConsumeLogger(BaseServiceLogger):
    """Logger for cascade consumer events."""

    def __init__(self) -> None:
        super().__init__(__name__)

    # -------------------------------------------------------------------------
    # Streams
    # -------------------------------------------------------------------------

    def subscribed(self, topic: str, group: str, consumer: str) -> None:
        self._logger.info(f"Reading {topic} as {consumer} in group {group}")

    def reconnecting(self, topic: str, wait_time: float, reason: str) -> None:
        self._logger.warning(
            f"Connection for {topic} lost ({reason}). Reconnecting in {wait_time:.1f}s..."
        )

    # -------------------------------------------------------------------------
    # Cascades
    # -------------------------------------------------------------------------

    def cascade_applied(self, topic: str, resources: list[str]) -> None:
        self._logger.info(f"[{topic}] Deleted reactions of {_describe(resources)}")

    def cascade_failed(self, topic: str, resources: list[str], error: Exception) -> None:
        """Log a failed cascade; call from the except block to keep the traceback."""
        self.exception(
            f"[{topic}] Failed to delete reactions of {_describe(resources)}: {error}"
        )

    def message_ignored(self, topic: str, reason: str) -> None:
        self._logger.warning(f"[{topic}] Ignoring message: {reason}")

    def retrying_pending(self, topic: str, wait_time: float) -> None:
        self._logger.warning(
            f"[{topic}] Cascade failed, retrying pending entries in {wait_time:.1f}s..."
        )

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def summary(
        self,
        stats: dict[str, "TopicStats"] | None = None,
        elapsed: float = 0.0,
        **kwargs: Any,
    ) -> None:
        """Print final consumer summary."""
        stats = stats or {}
        self.print_summary(
            "Cascade consumer",
            elapsed=elapsed,
            stats={
                "Topics": len(stats),
                "Messages received": sum(s.received for s in stats.values()),
                "Cascades applied": sum(s.cascaded for s in stats.values()),
                "Failures": sum(s.failed for s in stats.values()),
            },
            extra_sections={topic: s.as_dict() for topic, s in stats.items()},
            style="cyan",
        )


# Global logger instance
logger = ConsumeLogger()
