"""Bag operators: bag_of, sub_bag_of, super_bag_of.

Like the set operators, but duplicates count: each observed item must be
paired with its own candidate.  Pairing is a maximum one-to-one assignment
over the compatibility matrix, solved with the Hungarian algorithm, so
``[1, 2]`` matches ``bag_of(gt(0), 1)`` whatever the candidate order.
"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import Any

from deepmatch.engine.chain import MatchError, SetSummary, to_string
from deepmatch.engine.context import Context
from deepmatch.engine.matcher import assign
from deepmatch.engine.order import sorted_values
from deepmatch.operators.base import BaseOperator
from deepmatch.operators.sets import collection_items, compatibility

__all__ = ["BagKind", "BagOperator", "bag_of", "sub_bag_of", "super_bag_of"]


class BagKind(StrEnum):
    """Which side(s) of the assignment must be complete."""

    SUB_BAG = auto()
    SUPER_BAG = auto()
    BAG = auto()


class BagOperator(BaseOperator):
    """Order-insensitive, duplicate-sensitive containment check."""

    def __init__(self, bag_kind: BagKind, name: str, candidates: tuple[Any, ...]) -> None:
        super().__init__(name)
        self.bag_kind = bag_kind
        self.candidates = candidates

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        items, err = collection_items(ctx, got)
        if items is None:
            return err

        assignment = assign(compatibility(items, self.candidates))

        extra: list[Any] = []
        missing: list[Any] = []
        if self.bag_kind != BagKind.SUPER_BAG:
            extra = [items[row] for row in assignment.unassigned_rows]
        if self.bag_kind != BagKind.SUB_BAG:
            missing = [self.candidates[col] for col in assignment.unassigned_columns]

        if not extra and not missing:
            return None
        return ctx.mismatch(
            f"comparing %% as a {self.name}",
            summary=SetSummary(
                "item",
                missing=tuple(missing),
                extra=tuple(sorted_values(extra)),
            ),
        )

    def describe(self) -> str:
        return f"{self.name}({', '.join(to_string(c) for c in self.candidates)})"


def bag_of(*candidates: Any) -> BagOperator:
    """Match a collection pairing each item with its own candidate, none left over."""
    return BagOperator(BagKind.BAG, "bag_of", candidates)


def sub_bag_of(*candidates: Any) -> BagOperator:
    """Match a collection whose items each take a distinct candidate.

    Example::

        match([1, 1], sub_bag_of(1, 1, 2))   # matches
        match([1, 1], sub_bag_of(1, 2))      # fails: the second 1 is extra
    """
    return BagOperator(BagKind.SUB_BAG, "sub_bag_of", candidates)


def super_bag_of(*candidates: Any) -> BagOperator:
    """Match a collection providing a distinct item for each candidate."""
    return BagOperator(BagKind.SUPER_BAG, "super_bag_of", candidates)
