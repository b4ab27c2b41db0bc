"""Operations exposed to the REST and RPC transport layers.

Each call runs in its own session; mutating calls commit before
returning. Results are passed through from the repositories unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable, Mapping
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import InterfaceError, OperationalError

from reaction_service.db import repositories
from reaction_service.db.engine import get_async_session
from reaction_service.db.repositories.aggregation_repository import (
    DEFAULT_END_INDEX,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_ORDER,
    DEFAULT_START_INDEX,
)
from reaction_service.errors import StoreUnavailableError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from reaction_service.config.settings import AppSettings
    from reaction_service.db.models import Reaction, ReactionType, ResourceType

logger = logging.getLogger(__name__)


class ReactionFacade:
    """Entry point for transport layers into the reaction store."""

    def __init__(self, async_session: async_sessionmaker[AsyncSession]) -> None:
        self.async_session = async_session

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ReactionFacade":
        return cls(get_async_session(settings.database_url))

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self.async_session() as session:
                yield session
        except (OperationalError, InterfaceError, OSError, asyncio.TimeoutError) as e:
            logger.warning(f"Reaction store unavailable: {e}")
            raise StoreUnavailableError(str(e)) from e

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create(self, reaction: Mapping[str, Any]) -> Reaction:
        async with self._session() as session:
            created = await repositories.create_reaction(session, reaction)
            await session.commit()
            return created

    async def create_many(self, reactions: Iterable[Mapping[str, Any]]) -> list[Reaction]:
        async with self._session() as session:
            created = await repositories.create_reactions(session, reactions)
            if created:
                await session.commit()
            return created

    async def update(
        self, resource: str, user: str, type: ReactionType | str
    ) -> Reaction | None:
        async with self._session() as session:
            updated = await repositories.update_reaction(session, resource, user, type)
            if updated is not None:
                await session.commit()
            return updated

    async def delete(self, resource: str, user: str) -> bool:
        async with self._session() as session:
            deleted = await repositories.delete_reaction(session, resource, user)
            await session.commit()
            return deleted

    async def delete_many(self, resources: str | Iterable[str]) -> bool:
        async with self._session() as session:
            done = await repositories.delete_reactions(session, resources)
            await session.commit()
            return done

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def get_one(self, filters: Mapping[str, Any]) -> Reaction | None:
        async with self._session() as session:
            return await repositories.get_reaction(session, filters)

    async def get_many(self, filters: Mapping[str, Any]) -> list[Reaction]:
        async with self._session() as session:
            return await repositories.get_reactions(session, filters)

    async def get_amount(self, filters: Mapping[str, Any]) -> int:
        async with self._session() as session:
            return await repositories.count_reactions(session, filters)

    # -------------------------------------------------------------------------
    # Aggregations
    # -------------------------------------------------------------------------

    async def get_all_types_amounts_of_resource(
        self, resources: str | Iterable[str]
    ) -> list[dict[str, Any]]:
        async with self._session() as session:
            return await repositories.get_all_types_amounts_of_resource(
                session, resources
            )

    async def get_reaction_amount_by_type_and_resource_type(
        self,
        type: ReactionType | str,
        resource_type: ResourceType | str,
        start_index: int = DEFAULT_START_INDEX,
        end_index: int = DEFAULT_END_INDEX,
        sort_by: str = DEFAULT_SORT_BY,
        sort_order: str | None = DEFAULT_SORT_ORDER,
        time_limit_in_hours: float | None = None,
    ) -> list[dict[str, Any]]:
        async with self._session() as session:
            return await repositories.get_reaction_amount_by_type_and_resource_type(
                session,
                type,
                resource_type,
                start_index=start_index,
                end_index=end_index,
                sort_by=sort_by,
                sort_order=sort_order,
                time_limit_in_hours=time_limit_in_hours,
            )

    async def get_user_reacted_resources(
        self, resources: Iterable[str], user: str
    ) -> list[dict[str, Any]]:
        async with self._session() as session:
            return await repositories.get_user_reacted_resources(
                session, resources, user
            )
