"""Ordering of combinations by weight."""

from enum import Enum
from typing import Any, Callable, TypeVar

from ..models import Combination

T = TypeVar("T")


class SortMode(str, Enum):
    """Sort strategy for ranking combinations."""

    COMPARATOR = "comparator"
    QUICKSORT = "quicksort"


def _greater(current: Any, pivot: Any) -> bool:
    return current > pivot


def quicksort(
    items: list[T],
    left: int = 0,
    right: int | None = None,
    key: Callable[[T], Any] = lambda item: item,
    goes_left: Callable[[Any, Any], bool] = _greater,
) -> list[T]:
    """
    Sort ``items[left:right + 1]`` in place.

    Lomuto partition with the rightmost element as pivot. Elements whose
    key ``goes_left`` of the pivot key end up before it. Pending ranges
    are kept in a work list instead of recursing.

    Args:
        items: List to reorder in place
        left: First index of the range
        right: Last index of the range (defaults to the last element)
        key: Extracts the compared value from an element
        goes_left: Predicate (current, pivot) placing current before the pivot;
                   the default sorts in descending order

    Returns:
        The same list, reordered
    """
    if right is None:
        right = len(items) - 1

    def swap(one: int, two: int) -> None:
        items[one], items[two] = items[two], items[one]

    def partition(low: int, high: int) -> int:
        pivot_value = key(items[high])
        store = low
        for i in range(low, high):
            if goes_left(key(items[i]), pivot_value):
                swap(i, store)
                store += 1
        swap(store, high)
        return store

    pending = [(left, right)]
    while pending:
        low, high = pending.pop()
        if low >= high:
            continue
        pivot_index = partition(low, high)
        pending.append((low, pivot_index - 1))
        pending.append((pivot_index + 1, high))

    return items


def comparator_sort(combinations: list[Combination]) -> list[Combination]:
    """Sort combinations by weight, highest first."""
    return sorted(combinations, key=lambda c: c.weight, reverse=True)


def sort_combinations(
    combinations: list[Combination],
    mode: SortMode | str = SortMode.COMPARATOR,
) -> list[Combination]:
    """
    Rank combinations by descending weight.

    Both strategies give the same weight order; combinations with equal
    weight may come out in a different relative order.

    Raises:
        ValueError: If the sort mode is not supported
    """
    mode = SortMode(mode)
    if mode == SortMode.QUICKSORT:
        return quicksort(
            list(combinations),
            key=lambda c: c.weight,
            goes_left=lambda current, pivot: current > pivot,
        )
    return comparator_sort(combinations)
