"""Repository layer for database operations.

Provides clean separation between data access and business logic.
All reaction reads and writes are centralized here.
"""

from reaction_service.db.repositories.aggregation_repository import (
    get_all_types_amounts_of_resource,
    get_reaction_amount_by_type_and_resource_type,
    get_user_reacted_resources,
)
from reaction_service.db.repositories.reaction_repository import (
    count_reactions,
    create_reaction,
    create_reactions,
    delete_reaction,
    delete_reactions,
    get_reaction,
    get_reactions,
    update_reaction,
)

__all__ = [
    "create_reaction",
    "create_reactions",
    "update_reaction",
    "delete_reaction",
    "delete_reactions",
    "get_reaction",
    "get_reactions",
    "count_reactions",
    "get_all_types_amounts_of_resource",
    "get_reaction_amount_by_type_and_resource_type",
    "get_user_reacted_resources",
]
