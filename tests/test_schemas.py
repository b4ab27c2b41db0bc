"""Tests for reaction_service.schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from reaction_service.db.models import ReactionType, ResourceType
from reaction_service.errors import ReactionValidationError
from reaction_service.schemas import (
    ReactionCreate,
    ResourceRemovedEvent,
    parse_filter,
    parse_reaction,
)


# ---------------------------------------------------------------------------
# TestParseReaction
# ---------------------------------------------------------------------------


class TestParseReaction:
    """Tests for parse_reaction."""

    def test_parses_camel_case(self, reaction_payload) -> None:
        reaction = parse_reaction(reaction_payload)

        assert reaction.resource == reaction_payload["resource"]
        assert reaction.resource_type is ResourceType.COMMENT
        assert reaction.type is ReactionType.LIKE

    def test_returns_model_unchanged(self, reaction_payload) -> None:
        model = ReactionCreate.model_validate(reaction_payload)

        assert parse_reaction(model) is model

    def test_ignores_extra_keys(self, reaction_payload) -> None:
        reaction = parse_reaction({**reaction_payload, "updatedAt": "yesterday"})

        assert reaction.user == "alice@example.com"

    def test_error_names_field(self, reaction_payload) -> None:
        with pytest.raises(ReactionValidationError) as exc_info:
            parse_reaction({**reaction_payload, "user": "alice"})

        assert exc_info.value.field == "user"
        assert "local@domain" in exc_info.value.message

    def test_rejects_list(self) -> None:
        with pytest.raises(ReactionValidationError) as exc_info:
            parse_reaction(["r1"])

        assert exc_info.value.field == "reaction"


# ---------------------------------------------------------------------------
# TestParseFilter
# ---------------------------------------------------------------------------


class TestParseFilter:
    """Tests for parse_filter."""

    def test_maps_aliases_to_columns(self) -> None:
        result = parse_filter({"resourceType": "VIDEO", "user": "a@b"})

        assert result == {"resource_type": ResourceType.VIDEO, "user": "a@b"}

    def test_drops_none_values(self) -> None:
        assert parse_filter({"resource": None, "type": "LIKE"}) == {
            "type": ReactionType.LIKE
        }

    def test_empty_filter(self) -> None:
        assert parse_filter({}) == {}

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ValidationError):
            parse_filter({"score": 3})

    def test_non_mapping_raises_type_error(self) -> None:
        with pytest.raises(TypeError):
            parse_filter(["resource"])


# ---------------------------------------------------------------------------
# TestResourceRemovedEvent
# ---------------------------------------------------------------------------


class TestResourceRemovedEvent:
    """Tests for ResourceRemovedEvent."""

    def test_single_id(self) -> None:
        assert ResourceRemovedEvent(id="r1").resources == ["r1"]

    def test_id_list(self) -> None:
        assert ResourceRemovedEvent(ids=["r1", "r2"]).resources == ["r1", "r2"]

    def test_both_are_merged(self) -> None:
        event = ResourceRemovedEvent(id="r1", ids=["r2", "r1"])

        assert event.resources == ["r1", "r2"]

    def test_neither_is_empty(self) -> None:
        assert ResourceRemovedEvent().resources == []

    def test_blank_ids_are_dropped(self) -> None:
        assert ResourceRemovedEvent(id="", ids=[""]).resources == []

    def test_extra_keys_ignored(self) -> None:
        event = ResourceRemovedEvent.model_validate({"id": "r1", "removedBy": "mod"})

        assert event.resources == ["r1"]
