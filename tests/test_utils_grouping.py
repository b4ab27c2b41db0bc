"""Tests for reaction_service.utils.grouping."""

from __future__ import annotations

from reaction_service.utils.grouping import fold_type_counts, order_like


class TestFoldTypeCounts:
    """Tests for fold_type_counts function."""

    def test_folds_rows_per_resource(self) -> None:
        rows = [("r1", "LIKE", 2), ("r1", "DISLIKE", 1), ("r2", "LIKE", 4)]

        result = fold_type_counts(rows)

        assert result == [
            {"resource": "r1", "types": {"LIKE": 2, "DISLIKE": 1}},
            {"resource": "r2", "types": {"LIKE": 4}},
        ]

    def test_does_not_zero_fill_missing_types(self) -> None:
        result = fold_type_counts([("r1", "DISLIKE", 1)])

        assert result == [{"resource": "r1", "types": {"DISLIKE": 1}}]

    def test_no_rows_no_entries(self) -> None:
        assert fold_type_counts([]) == []

    def test_zero_counts_are_dropped(self) -> None:
        assert fold_type_counts([("r1", "LIKE", 0)]) == []

    def test_sums_repeated_groups(self) -> None:
        result = fold_type_counts([("r1", "LIKE", 1), ("r1", "LIKE", 2)])

        assert result == [{"resource": "r1", "types": {"LIKE": 3}}]


class TestOrderLike:
    """Tests for order_like function."""

    def test_sorts_by_reference_order(self) -> None:
        entries = [{"resource": "a"}, {"resource": "b"}]

        assert order_like(entries, ["b", "a"]) == [{"resource": "b"}, {"resource": "a"}]

    def test_unknown_resources_go_last(self) -> None:
        entries = [{"resource": "x"}, {"resource": "a"}]

        assert order_like(entries, ["a"]) == [{"resource": "a"}, {"resource": "x"}]
