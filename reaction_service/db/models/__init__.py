"""Reaction Service Database Models.

All models use SQLAlchemy 2.0 syntax with PostgreSQL dialect.
"""

from reaction_service.db.base import Base
from reaction_service.db.models.reaction import Reaction, ReactionType, ResourceType

__all__ = [
    "Base",
    "Reaction",
    "ReactionType",
    "ResourceType",
]
