"""Pydantic schemas for reaction input and query filters.

Field names are snake_case; the camelCase names used on the wire
(``resourceType``) are accepted as aliases.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from reaction_service.db.models.reaction import ReactionType, ResourceType
from reaction_service.errors import ReactionValidationError
from reaction_service.utils.ids import is_valid_resource, is_valid_user
from reaction_service.utils.json import compact_json


class ReactionCreate(BaseModel):
    """A reaction as submitted by a caller."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resource: str
    resource_type: ResourceType = Field(alias="resourceType")
    user: str
    type: ReactionType

    @field_validator("resource")
    @classmethod
    def check_resource(cls, v: str) -> str:
        if not is_valid_resource(v):
            raise ValueError("resource must be a non-empty identifier")
        return v

    @field_validator("user")
    @classmethod
    def check_user(cls, v: str) -> str:
        if not is_valid_user(v):
            raise ValueError("user must look like local@domain")
        return v


class ReactionFilter(BaseModel):
    """Partial attribute map used by the lookup and count operations."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    resource: str | None = None
    resource_type: ResourceType | None = Field(default=None, alias="resourceType")
    user: str | None = None
    type: ReactionType | None = None


def _first_error_field(exc: ValidationError, default: str) -> tuple[str, str]:
    error = exc.errors()[0]
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else default
    if field == "resource_type":
        field = "resourceType"
    return field, error.get("msg", f"{field} is invalid")


def parse_reaction(data: Any) -> ReactionCreate:
    """Validate one reaction payload.

    Raises:
        ReactionValidationError: naming the first field that failed.
    """
    if isinstance(data, ReactionCreate):
        return data
    if not isinstance(data, Mapping):
        raise ReactionValidationError("reaction", "reaction must be an object")
    try:
        return ReactionCreate.model_validate(dict(data))
    except ValidationError as e:
        field, message = _first_error_field(e, "reaction")
        raise ReactionValidationError(field, message) from e


def parse_filter(filters: Mapping[str, Any]) -> dict[str, Any]:
    """Turn a partial filter map into column -> value pairs.

    Keys whose value is None are dropped before validation.

    Raises:
        TypeError: if ``filters`` is not a mapping.
        pydantic.ValidationError: for unknown keys or non-enumerated values.
    """
    if not isinstance(filters, Mapping):
        raise TypeError(
            f"filter must be a mapping, not {type(filters).__name__}"
        )
    parsed = ReactionFilter.model_validate(compact_json(dict(filters)))
    return parsed.model_dump(exclude_none=True)
