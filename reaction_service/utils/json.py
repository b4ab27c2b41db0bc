# reaction_service/utils/json.py
from __future__ import annotations

import json
from typing import Any


def compact_json(data: Any) -> Any:
    """
    Remove keys with None values (shallow).
    Useful before turning a partial filter into query clauses.
    """
    if not isinstance(data, dict):
        return data
    return {k: v for k, v in data.items() if v is not None}


def decode_payload(data: Any) -> Any:
    """Decode a message body (bytes or str) from JSON; other values pass through."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    if isinstance(data, str):
        return json.loads(data)
    return data
