# reaction_service/utils/grouping.py
from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any


def fold_type_counts(
    rows: Iterable[tuple[str, Hashable, int]],
) -> list[dict[str, Any]]:
    """Fold (resource, type, count) rows into one entry per resource.

    Types that never occur are left out of the ``types`` map rather than
    zero-filled, and resources without rows get no entry. Entries follow
    the order in which resources first appear.

    >>> fold_type_counts([("r1", "LIKE", 2), ("r1", "DISLIKE", 1)])
    [{'resource': 'r1', 'types': {'LIKE': 2, 'DISLIKE': 1}}]
    """
    by_resource: dict[str, dict[Hashable, int]] = {}
    for resource, reaction_type, count in rows:
        if not count:
            continue
        types = by_resource.setdefault(resource, {})
        types[reaction_type] = types.get(reaction_type, 0) + count
    return [
        {"resource": resource, "types": types}
        for resource, types in by_resource.items()
    ]


def order_like(entries: list[dict[str, Any]], resources: list[str]) -> list[dict[str, Any]]:
    """Sort per-resource entries to follow the order of ``resources``."""
    position = {resource: i for i, resource in enumerate(resources)}
    return sorted(entries, key=lambda e: position.get(e["resource"], len(position)))
