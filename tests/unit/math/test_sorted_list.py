"""Tests for bounded sorted insertion."""

import pytest

from pairswap.math import BoundedSortedList, sorted_insert


def ascending(a: int, b: int) -> int:
    return a - b


class TestSortedInsert:
    def test_max_size_zero_raises(self):
        with pytest.raises(ValueError):
            sorted_insert([], 1, 0, ascending)

    def test_oversized_list_raises(self):
        with pytest.raises(ValueError):
            sorted_insert([1, 2], 1, 1, ascending)

    def test_adds_first_item(self):
        items: list[int] = []
        assert sorted_insert(items, 3, 2, ascending) is None
        assert items == [3]

    def test_keeps_order(self):
        items: list[int] = []
        for value in [5, 1, 4, 2, 3]:
            sorted_insert(items, value, 5, ascending)
        assert items == [1, 2, 3, 4, 5]

    def test_evicts_last_when_full(self):
        items = [1, 3, 5]
        assert sorted_insert(items, 2, 3, ascending) == 5
        assert items == [1, 2, 3]

    def test_rejects_candidate_ranking_last(self):
        items = [1, 3, 5]
        assert sorted_insert(items, 6, 3, ascending) == 6
        assert items == [1, 3, 5]

    def test_full_candidate_equal_to_last_is_rejected(self):
        items = [1, 3, 5]
        assert sorted_insert(items, 5, 3, ascending) == 5
        assert items == [1, 3, 5]

    def test_ties_insert_after_existing(self):
        """Equal items keep insertion order."""
        items = [(1, "a"), (2, "b")]
        sorted_insert(items, (1, "c"), 5, lambda x, y: x[0] - y[0])
        assert items == [(1, "a"), (1, "c"), (2, "b")]


class TestBoundedSortedList:
    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            BoundedSortedList(0, ascending)

    def test_keeps_best_items(self):
        best = BoundedSortedList(3, ascending, [9, 2, 7, 1, 8])
        assert best.to_list() == [1, 2, 7]
        assert best.is_full
        assert len(best) == 3
        assert best[0] == 1

    def test_insert_returns_evicted(self):
        best = BoundedSortedList(2, ascending, [1, 3])
        assert best.insert(2) == 3
        assert list(best) == [1, 2]

    def test_merge(self):
        best = BoundedSortedList(3, ascending, [4, 6])
        best.merge(BoundedSortedList(3, ascending, [1, 5]))
        assert best.to_list() == [1, 4, 5]

    def test_to_list_is_a_copy(self):
        best = BoundedSortedList(3, ascending, [1])
        best.to_list().append(99)
        assert best.to_list() == [1]
