"""Reaction repository: point and bulk operations on reactions.

Owns the (resource, user) uniqueness rule. Nothing here commits;
the caller owns the transaction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy import ColumnElement, and_, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from reaction_service.db.base import utcnow
from reaction_service.db.models import Reaction, ReactionType
from reaction_service.db.models.reaction import coerce_enum
from reaction_service.errors import PreconditionError
from reaction_service.schemas.reaction import ReactionCreate, parse_filter, parse_reaction
from reaction_service.utils.ids import as_resource_list

UNIQUE_KEY = ["resource", "user"]


def _values(reaction: ReactionCreate) -> dict[str, Any]:
    now = utcnow()
    return {
        "resource": reaction.resource,
        "resource_type": reaction.resource_type,
        "user": reaction.user,
        "type": reaction.type,
        "created_at": now,
        "updated_at": now,
    }


def _where(filters: dict[str, Any]) -> list[ColumnElement[bool]]:
    return [getattr(Reaction, column) == value for column, value in filters.items()]


def _pair(resource: str, user: str) -> ColumnElement[bool]:
    return and_(Reaction.resource == resource, Reaction.user == user)


async def create_reaction(
    session: AsyncSession, reaction: ReactionCreate | Mapping[str, Any]
) -> Reaction:
    """Create a reaction, or return the existing one for the same (resource, user).

    An existing reaction is returned unchanged: its type is never
    overwritten here, use update_reaction for that. The unique constraint
    on (resource, user) with ON CONFLICT DO NOTHING lets concurrent
    creates for the same pair settle on a single row.

    Args:
        session: Database session
        reaction: Reaction payload (mapping or ReactionCreate)

    Returns:
        The stored reaction for (resource, user)

    Raises:
        ReactionValidationError: If a field is missing or invalid
    """
    data = parse_reaction(reaction)

    stmt = (
        pg_insert(Reaction)
        .values(_values(data))
        .on_conflict_do_nothing(index_elements=UNIQUE_KEY)
    )
    await session.execute(stmt)

    result = await session.execute(
        select(Reaction).where(_pair(data.resource, data.user))
    )
    return result.scalar_one()


async def create_reactions(
    session: AsyncSession,
    reactions: Iterable[ReactionCreate | Mapping[str, Any]],
) -> list[Reaction]:
    """Bulk insert reactions.

    Every element is validated before anything is written, so one invalid
    element rejects the whole batch. Pairs that already exist, or repeat an
    earlier element of the batch, are skipped and not returned.

    Args:
        session: Database session
        reactions: Reaction payloads

    Returns:
        The newly inserted reactions

    Raises:
        ReactionValidationError: If any element is invalid
    """
    validated = [parse_reaction(r) for r in reactions]
    if not validated:
        return []

    stmt = (
        pg_insert(Reaction)
        .values([_values(r) for r in validated])
        .on_conflict_do_nothing(index_elements=UNIQUE_KEY)
        .returning(Reaction)
    )
    result = await session.scalars(stmt)
    return list(result.all())


async def update_reaction(
    session: AsyncSession,
    resource: str,
    user: str,
    type: ReactionType | str,
) -> Reaction | None:
    """Change the type of the reaction for (resource, user).

    Returns:
        The updated reaction, or None if the pair has no reaction

    Raises:
        ReactionValidationError: If type is not a known reaction type
    """
    reaction_type = coerce_enum(ReactionType, "type", type)

    stmt = (
        update(Reaction)
        .where(_pair(resource, user))
        .values(type=reaction_type, updated_at=utcnow())
        .returning(Reaction)
        .execution_options(synchronize_session=False)
    )
    result = await session.scalars(stmt)
    return result.one_or_none()


async def delete_reaction(session: AsyncSession, resource: str, user: str) -> bool:
    """Delete the reaction for (resource, user).

    Returns:
        True if exactly one reaction was removed, False otherwise
    """
    stmt = (
        delete(Reaction)
        .where(_pair(resource, user))
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    return result.rowcount == 1


async def delete_reactions(
    session: AsyncSession, resources: str | Iterable[str]
) -> bool:
    """Delete every reaction of one or more resources.

    Succeeds even when nothing matched, which keeps cascade cleanup
    idempotent under redelivery.

    Args:
        session: Database session
        resources: A resource id or a collection of them

    Returns:
        True once the delete has been executed
    """
    resource_ids = as_resource_list(resources)
    if not resource_ids:
        return True

    stmt = (
        delete(Reaction)
        .where(Reaction.resource.in_(resource_ids))
        .execution_options(synchronize_session=False)
    )
    await session.execute(stmt)
    return True


async def get_reaction(
    session: AsyncSession, filters: Mapping[str, Any]
) -> Reaction | None:
    """Get the first reaction matching a partial filter.

    Raises:
        PreconditionError: If the filter is empty
    """
    try:
        clauses = parse_filter(filters)
    except (TypeError, ValidationError):
        return None
    if not clauses:
        raise PreconditionError()

    stmt = select(Reaction).where(*_where(clauses)).order_by(Reaction.id).limit(1)
    result = await session.execute(stmt)
    return result.scalars().first()


async def get_reactions(
    session: AsyncSession, filters: Mapping[str, Any]
) -> list[Reaction]:
    """Get every reaction matching a partial filter (all of them if empty).

    Raises:
        TypeError: If filters is not a mapping
    """
    try:
        clauses = parse_filter(filters)
    except ValidationError:
        return []

    result = await session.execute(
        select(Reaction).where(*_where(clauses)).order_by(Reaction.id)
    )
    return list(result.scalars().all())


async def count_reactions(session: AsyncSession, filters: Any) -> int:
    """Count reactions matching a partial filter.

    Filters that cannot be parsed count as matching nothing.
    """
    try:
        clauses = parse_filter(filters)
    except (TypeError, ValidationError):
        return 0

    stmt = select(func.count()).select_from(Reaction).where(*_where(clauses))
    result = await session.execute(stmt)
    return result.scalar() or 0

