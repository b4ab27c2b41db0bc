from reaction_service.schemas.events import ResourceRemovedEvent
from reaction_service.schemas.reaction import (
    ReactionCreate,
    ReactionFilter,
    parse_filter,
    parse_reaction,
)

__all__ = [
    "ReactionCreate",
    "ReactionFilter",
    "ResourceRemovedEvent",
    "parse_filter",
    "parse_reaction",
]
