"""Bounded, comparator-sorted collections for top-K selection.

The best-trade search keeps only the K best candidates seen so far. Items
are ordered by a three-way comparator (negative: a ranks before b) and the
lowest-ranked item is evicted when capacity is exceeded.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Iterable, Iterator
from functools import cmp_to_key
from typing import Generic, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, T], int]


def sorted_insert(items: list[T], add: T, max_size: int, comparator: Comparator[T]) -> T | None:
    """Insert an item into a sorted list, keeping at most max_size items.

    The item is placed after any items that compare equal to it, so
    insertion order breaks ties. The list is modified in place.

    Args:
        items: List already sorted by comparator
        add: Item to insert
        max_size: Capacity of the list
        comparator: Three-way comparator defining the order

    Returns:
        The item removed to respect max_size (possibly `add` itself when
        it ranks last in a full list), or None if nothing was removed.

    Raises:
        ValueError: If max_size is not positive, or items already exceeds it
    """
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")
    # A single return slot cannot report more than one eviction
    if len(items) > max_size:
        raise ValueError(f"items size {len(items)} exceeds max_size {max_size}")

    if not items:
        items.append(add)
        return None

    is_full = len(items) == max_size
    if is_full and comparator(items[-1], add) <= 0:
        return add

    key = cmp_to_key(comparator)
    index = bisect_right(items, key(add), key=key)
    items.insert(index, add)
    return items.pop() if is_full else None


class BoundedSortedList(Generic[T]):
    """Sorted collection holding the best `capacity` items by comparator.

    Usage:
        best = BoundedSortedList(3, trade_comparator)
        for trade in candidates:
            best.insert(trade)
        top = best.to_list()
    """

    __slots__ = ("_capacity", "_comparator", "_items")

    def __init__(
        self,
        capacity: int,
        comparator: Comparator[T],
        items: Iterable[T] = (),
    ) -> None:
        """Create an empty list, optionally seeded with items.

        Args:
            capacity: Maximum number of items retained
            comparator: Three-way comparator defining the order
            items: Initial items (need not be sorted)

        Raises:
            ValueError: If capacity is not positive
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._comparator = comparator
        self._items: list[T] = []
        for item in items:
            self.insert(item)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._items) == self._capacity

    def insert(self, item: T) -> T | None:
        """Insert an item; return the evicted item, or None."""
        return sorted_insert(self._items, item, self._capacity, self._comparator)

    def merge(self, other: Iterable[T]) -> None:
        """Insert every item from another collection."""
        for item in other:
            self.insert(item)

    def to_list(self) -> list[T]:
        """Return a copy of the items, best first."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __repr__(self) -> str:
        return f"BoundedSortedList(capacity={self._capacity}, size={len(self._items)})"


__all__ = ["BoundedSortedList", "Comparator", "sorted_insert"]
