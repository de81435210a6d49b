"""Set operators: subset_of, superset_of, set_of.

Observed items are compared to candidates (literals or operators) ignoring
order and duplicates: ``[1, 1, 2]`` holds the same items as ``{2, 1}``.

Every distinct observed item is checked against every candidate, giving a
boolean compatibility matrix (rows: observed items, columns: candidates).
An item may satisfy several candidates and a candidate may cover several
items, so the verdict only depends on empty rows and columns:

- an empty row is an observed item no candidate accepts ("extra");
- an empty column is a candidate no observed item satisfies ("missing").

``subset_of`` forbids extra items, ``superset_of`` forbids missing ones,
``set_of`` forbids both.  No first-fit decision is ever taken, so an item
satisfying two candidates cannot starve another item.
"""

from __future__ import annotations

import weakref
from enum import StrEnum, auto
from typing import Any

import numpy as np

from deepmatch.engine.chain import MatchError, RawString, SetSummary, to_string
from deepmatch.engine.context import Context
from deepmatch.engine.kinds import Kind, kind_of, type_name
from deepmatch.engine.order import sorted_values
from deepmatch.operators.base import BaseOperator, probe

__all__ = [
    "SetKind",
    "SetOperator",
    "collection_items",
    "compatibility",
    "set_of",
    "subset_of",
    "superset_of",
]

_COLLECTION_KINDS = frozenset({Kind.ARRAY, Kind.SLICE, Kind.SET})


class SetKind(StrEnum):
    """Which side(s) of the comparison must be fully covered."""

    SUBSET = auto()
    SUPERSET = auto()
    SET = auto()


def collection_items(ctx: Context, got: Any) -> tuple[list[Any] | None, MatchError | None]:
    """Items of a list/tuple/set (or of a weak reference to one).

    Returns:
        ``(items, None)`` on success, ``(None, error)`` otherwise.
    """
    if isinstance(got, weakref.ref):
        target = got()
        if target is None:
            return None, ctx.mismatch("dead weak reference", got, RawString("list, tuple or set"))
        got = target

    if kind_of(got) not in _COLLECTION_KINDS:
        return None, ctx.mismatch(
            "bad kind",
            RawString(type_name(type(got))),
            RawString("list, tuple or set"),
        )
    return list(got), None


def compatibility(items: list[Any], candidates: tuple[Any, ...]) -> np.ndarray:
    """Boolean ``(len(items), len(candidates))`` matrix of item/candidate matches."""
    matrix = np.zeros((len(items), len(candidates)), dtype=bool)
    for row, item in enumerate(items):
        for col, candidate in enumerate(candidates):
            matrix[row, col] = probe(item, candidate)
    return matrix


def _distinct(items: list[Any]) -> list[Any]:
    distinct: list[Any] = []
    for item in items:
        if not any(probe(item, seen) for seen in distinct):
            distinct.append(item)
    return distinct


class SetOperator(BaseOperator):
    """Order- and duplicate-insensitive containment check."""

    def __init__(self, set_kind: SetKind, name: str, candidates: tuple[Any, ...]) -> None:
        super().__init__(name)
        self.set_kind = set_kind
        self.candidates = candidates

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        items, err = collection_items(ctx, got)
        if items is None:
            return err

        observed = _distinct(items)
        matrix = compatibility(observed, self.candidates)

        extra: list[Any] = []
        missing: list[Any] = []
        if self.set_kind != SetKind.SUPERSET:
            extra = [observed[row] for row in np.flatnonzero(~matrix.any(axis=1))]
        if self.set_kind != SetKind.SUBSET:
            missing = [self.candidates[col] for col in np.flatnonzero(~matrix.any(axis=0))]

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


def subset_of(*candidates: Any) -> SetOperator:
    """Match a collection whose every item satisfies at least one candidate.

    Candidates may go unused.

    Example::

        match([1, 3, 5, 8, 8, 1, 2], subset_of(between(1, 4), 3, between(2, 10), gt(100)))
    """
    return SetOperator(SetKind.SUBSET, "subset_of", candidates)


def superset_of(*candidates: Any) -> SetOperator:
    """Match a collection in which every candidate is satisfied by some item."""
    return SetOperator(SetKind.SUPERSET, "superset_of", candidates)


def set_of(*candidates: Any) -> SetOperator:
    """Match a collection whose items and candidates cover each other."""
    return SetOperator(SetKind.SET, "set_of", candidates)
