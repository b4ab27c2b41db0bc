"""Reaction ORM model."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import Enum, Identity, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from reaction_service.db.base import Base, TZDateTime, utcnow
from reaction_service.errors import ReactionValidationError
from reaction_service.utils.ids import is_valid_resource, is_valid_user


class ReactionType(str, enum.Enum):
    LIKE = "LIKE"
    DISLIKE = "DISLIKE"


class ResourceType(str, enum.Enum):
    COMMENT = "COMMENT"
    VIDEO = "VIDEO"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def coerce_enum(enum_cls: type[enum.Enum], field: str, value: Any) -> Any:
    """Return ``value`` as a member of ``enum_cls`` or raise a validation error."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ReactionValidationError(
            field, f"{field} must be one of {', '.join(_enum_values(enum_cls))}"
        ) from None


class Reaction(Base):
    """
    A single user's reaction to an external resource.

    At most one row exists per (resource, user), whatever its type.
    """

    __tablename__ = "reactions"

    id: Mapped[int] = mapped_column(Identity(), primary_key=True)

    # Opaque external identifiers
    resource: Mapped[str] = mapped_column(String(255), nullable=False)
    user: Mapped[str] = mapped_column(String(255), nullable=False)

    resource_type: Mapped[ResourceType] = mapped_column(
        Enum(ResourceType, name="resource_type", values_callable=_enum_values),
        nullable=False,
    )
    type: Mapped[ReactionType] = mapped_column(
        Enum(ReactionType, name="reaction_type", values_callable=_enum_values),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        TZDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        UniqueConstraint("resource", "user", name="uq_reactions_resource_user"),
        Index("ix_reactions_user", "user"),
        Index("ix_reactions_type_resource_type", "type", "resource_type"),
    )

    @validates("resource")
    def _validate_resource(self, key: str, value: Any) -> str:
        if not is_valid_resource(value):
            raise ReactionValidationError("resource")
        return value

    @validates("user")
    def _validate_user(self, key: str, value: Any) -> str:
        if not is_valid_user(value):
            raise ReactionValidationError("user")
        return value

    @validates("resource_type")
    def _validate_resource_type(self, key: str, value: Any) -> ResourceType:
        return coerce_enum(ResourceType, "resourceType", value)

    @validates("type")
    def _validate_type(self, key: str, value: Any) -> ReactionType:
        return coerce_enum(ReactionType, "type", value)

    def __repr__(self) -> str:
        return (
            f"<Reaction(resource='{self.resource}', user='{self.user}', "
            f"type={self.type.value if self.type else None})>"
        )
