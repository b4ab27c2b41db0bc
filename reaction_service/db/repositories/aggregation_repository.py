"""Aggregation queries over stored reactions.

Read-only grouped counts backing the per-resource totals, the
leaderboard, and the "did this user react" lookup.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reaction_service.db.base import utcnow
from reaction_service.db.models import Reaction, ReactionType, ResourceType
from reaction_service.db.models.reaction import coerce_enum
from reaction_service.errors import ReactionValidationError
from reaction_service.utils.grouping import fold_type_counts, order_like
from reaction_service.utils.ids import as_resource_list

DEFAULT_START_INDEX = 0
DEFAULT_END_INDEX = 20
DEFAULT_SORT_BY = "amount"
DEFAULT_SORT_ORDER = "-"

SORT_ORDERS = ("-", "")

# Anything older reaches past datetime.min
MAX_TIME_LIMIT_IN_HOURS = 24 * 365 * 1000


async def get_all_types_amounts_of_resource(
    session: AsyncSession, resources: str | Iterable[str]
) -> list[dict[str, Any]]:
    """Count reactions per type for each resource.

    Args:
        session: Database session
        resources: A resource id or a collection of them

    Returns:
        ``[{"resource": ..., "types": {ReactionType: count}}]`` in input
        order. Types without reactions are omitted; resources without any
        reaction produce no entry.
    """
    resource_ids = as_resource_list(resources)
    if not resource_ids:
        return []

    stmt = (
        select(Reaction.resource, Reaction.type, func.count())
        .where(Reaction.resource.in_(resource_ids))
        .group_by(Reaction.resource, Reaction.type)
        .order_by(Reaction.resource, Reaction.type)
    )
    result = await session.execute(stmt)
    return order_like(fold_type_counts(result.all()), resource_ids)


def _window(start_index: int, end_index: int) -> tuple[int, int]:
    if start_index is None or start_index < 0:
        raise ReactionValidationError("startIndex", "startIndex must be >= 0")
    if end_index is None or end_index < start_index:
        raise ReactionValidationError(
            "endIndex", "endIndex must be >= startIndex"
        )
    return start_index, end_index - start_index


async def get_reaction_amount_by_type_and_resource_type(
    session: AsyncSession,
    type: ReactionType | str,
    resource_type: ResourceType | str,
    start_index: int = DEFAULT_START_INDEX,
    end_index: int = DEFAULT_END_INDEX,
    sort_by: str = DEFAULT_SORT_BY,
    sort_order: str | None = DEFAULT_SORT_ORDER,
    time_limit_in_hours: float | None = None,
) -> list[dict[str, Any]]:
    """Rank resources by how many reactions of one type they received.

    Sorting and the ``[start_index, end_index)`` window are applied in the
    database, so only the requested page is loaded.

    Args:
        session: Database session
        type: Reaction type to count
        resource_type: Only count resources of this type
        start_index: First position of the page (inclusive)
        end_index: Last position of the page (exclusive)
        sort_by: "amount" or "resource"
        sort_order: "-" for descending, "" or None for ascending
        time_limit_in_hours: Only count reactions updated this recently

    Returns:
        ``[{"resource": ..., "type": ..., "amount": ...}]``

    Raises:
        ReactionValidationError: If any argument is out of range
    """
    reaction_type = coerce_enum(ReactionType, "type", type)
    resource_kind = coerce_enum(ResourceType, "resourceType", resource_type)
    offset, limit = _window(start_index, end_index)

    sort_order = sort_order or ""
    if sort_order not in SORT_ORDERS:
        raise ReactionValidationError("sortOrder", "sortOrder must be '-' or ''")

    amount = func.count().label("amount")
    sort_columns = {"amount": amount, "resource": Reaction.resource}
    if sort_by not in sort_columns:
        raise ReactionValidationError(
            "sortBy", f"sortBy must be one of {', '.join(sort_columns)}"
        )

    sort_column = sort_columns[sort_by]
    order = sort_column.desc() if sort_order == "-" else sort_column.asc()

    if time_limit_in_hours is not None and not (
        0 <= time_limit_in_hours <= MAX_TIME_LIMIT_IN_HOURS
    ):
        raise ReactionValidationError(
            "timeLimitInHours",
            f"timeLimitInHours must be between 0 and {MAX_TIME_LIMIT_IN_HOURS}",
        )

    if limit == 0:
        return []

    stmt = select(Reaction.resource, Reaction.type, amount).where(
        Reaction.type == reaction_type,
        Reaction.resource_type == resource_kind,
    )
    if time_limit_in_hours is not None:
        since = utcnow() - timedelta(hours=time_limit_in_hours)
        stmt = stmt.where(Reaction.updated_at >= since)

    stmt = (
        stmt.group_by(Reaction.resource, Reaction.type)
        .order_by(order, Reaction.resource.asc())
        .offset(offset)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return [
        {"resource": resource, "type": kind, "amount": count}
        for resource, kind, count in result.all()
    ]


async def get_user_reacted_resources(
    session: AsyncSession, resources: Iterable[str], user: str
) -> list[dict[str, Any]]:
    """Return the user's reactions among the candidate resources.

    Returns:
        ``[{"resource": ..., "type": ...}]`` for each candidate the user
        has reacted to
    """
    resource_ids = as_resource_list(resources)
    if not resource_ids:
        return []

    stmt = (
        select(Reaction.resource, Reaction.type)
        .where(Reaction.user == user, Reaction.resource.in_(resource_ids))
        .order_by(Reaction.resource)
    )
    result = await session.execute(stmt)
    return [{"resource": resource, "type": kind} for resource, kind in result.all()]
