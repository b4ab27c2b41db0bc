# reaction_service/utils/ids.py
from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

# local@domain, no whitespace, exactly one "@"
USER_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


def is_valid_user(value: Any) -> bool:
    return isinstance(value, str) and bool(USER_PATTERN.match(value))


def is_valid_resource(value: Any) -> bool:
    return isinstance(value, str) and bool(value) and value == value.strip()


def as_resource_list(value: str | Iterable[str] | None) -> list[str]:
    """Normalize a single resource id or a collection of ids to a deduplicated list.

    Order of first appearance is preserved.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(dict.fromkeys(value))
