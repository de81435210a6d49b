"""VisitedPairs: per-call cycle guard keyed by object identity pairs."""

from __future__ import annotations

from typing import Any

__all__ = ["VisitedPairs"]


class VisitedPairs:
    """Set of ``(left, right)`` object pairs already entered during one call.

    Pairs are keyed by ``(id(left), id(right))``.  Both objects are kept
    alive by the set itself so that an id can never be recycled by a
    temporary object (a dereferenced weak reference, a smuggled value)
    while the traversal is still running.

    The set only grows.  A fresh instance is created for every top-level
    match or comparison and is never shared between calls.

    Example::

        visited = VisitedPairs()
        visited.record(a, b)   # False: first time, now recorded
        visited.record(a, b)   # True: already in progress
    """

    __slots__ = ("_pairs",)

    def __init__(self) -> None:
        self._pairs: dict[tuple[int, int], tuple[Any, Any]] = {}

    def record(self, left: Any, right: Any) -> bool:
        """Record the pair, returning True if it was already recorded."""
        key = (id(left), id(right))
        if key in self._pairs:
            return True
        self._pairs[key] = (left, right)
        return False

    def copy(self) -> VisitedPairs:
        """Independent guard starting with the pairs recorded so far."""
        clone = VisitedPairs()
        clone._pairs = dict(self._pairs)
        return clone

    def __contains__(self, pair: tuple[Any, Any]) -> bool:
        left, right = pair
        return (id(left), id(right)) in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)
