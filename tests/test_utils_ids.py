"""Tests for reaction_service.utils.ids."""

from __future__ import annotations

from reaction_service.utils.ids import as_resource_list, is_valid_resource, is_valid_user


class TestIsValidUser:
    """Tests for is_valid_user function."""

    def test_accepts_email_like(self) -> None:
        assert is_valid_user("alice@example.com")

    def test_accepts_minimal(self) -> None:
        assert is_valid_user("a@b")

    def test_rejects_empty(self) -> None:
        assert not is_valid_user("")

    def test_rejects_missing_at(self) -> None:
        assert not is_valid_user("alice")

    def test_rejects_double_at(self) -> None:
        assert not is_valid_user("a@b@c")

    def test_rejects_whitespace(self) -> None:
        assert not is_valid_user("alice @example.com")

    def test_rejects_non_string(self) -> None:
        assert not is_valid_user(None)
        assert not is_valid_user(42)


class TestIsValidResource:
    """Tests for is_valid_resource function."""

    def test_accepts_opaque_id(self) -> None:
        assert is_valid_resource("5c1a2b3c4d5e6f7a8b9c0d1e")

    def test_rejects_empty(self) -> None:
        assert not is_valid_resource("")

    def test_rejects_padded(self) -> None:
        assert not is_valid_resource(" r1 ")

    def test_rejects_non_string(self) -> None:
        assert not is_valid_resource(None)
        assert not is_valid_resource(["r1"])


class TestAsResourceList:
    """Tests for as_resource_list function."""

    def test_returns_empty_for_none(self) -> None:
        assert as_resource_list(None) == []

    def test_wraps_single_id(self) -> None:
        assert as_resource_list("r1") == ["r1"]

    def test_deduplicates_preserving_order(self) -> None:
        assert as_resource_list(["r2", "r1", "r2"]) == ["r2", "r1"]

    def test_accepts_any_iterable(self) -> None:
        assert as_resource_list(iter(("a", "b"))) == ["a", "b"]
