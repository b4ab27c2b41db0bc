"""Cascading delete of reactions when their resource is removed."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from reaction_service.consume.logger import logger
from reaction_service.db.repositories import delete_reactions
from reaction_service.schemas.events import ResourceRemovedEvent
from reaction_service.utils.json import decode_payload

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class CascadeOutcome(str, enum.Enum):
    CASCADED = "cascaded"
    IGNORED = "ignored"
    FAILED = "failed"


async def handle_resource_removed(
    async_session: async_sessionmaker[AsyncSession],
    topic: str,
    payload: Any,
) -> CascadeOutcome:
    """Delete the reactions of the resource(s) named in a removal event.

    Never raises. Payloads without ``id``/``ids`` are ignored. Store
    failures are logged and reported as FAILED, which leaves the event
    unacknowledged so it is delivered again. Redelivered events are
    harmless since deleting absent reactions succeeds.

    Args:
        async_session: Session factory for the reaction store
        topic: Topic the event arrived on (for logging)
        payload: Raw message body (JSON bytes/str) or an already decoded mapping

    Returns:
        What happened to the event
    """
    try:
        event = ResourceRemovedEvent.model_validate(decode_payload(payload))
    except (ValueError, ValidationError) as e:
        logger.message_ignored(topic, f"undecodable payload ({e.__class__.__name__})")
        return CascadeOutcome.IGNORED

    resources = event.resources
    if not resources:
        logger.message_ignored(topic, "no id or ids")
        return CascadeOutcome.IGNORED

    try:
        async with async_session() as session:
            await delete_reactions(session, resources)
            await session.commit()
    except Exception as e:
        logger.cascade_failed(topic, resources, e)
        return CascadeOutcome.FAILED

    logger.cascade_applied(topic, resources)
    return CascadeOutcome.CASCADED
