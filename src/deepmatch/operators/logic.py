"""Combinators: all_of, any_of, ignore."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from deepmatch.engine.chain import MatchError, to_string
from deepmatch.engine.context import Context
from deepmatch.engine.deep import deep_match
from deepmatch.operators.base import BaseOperator

__all__ = ["AllOf", "AnyOf", "Ignore", "all_of", "any_of", "ignore"]


class AllOf(BaseOperator):
    """Matches when every expected value matches.

    The first failing value is reported, its own error chain attached as
    ``origin``.
    """

    def __init__(self, items: tuple[Any, ...]) -> None:
        super().__init__("all_of")
        self.items = items

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        inner = ctx.reset_errors()
        for pos, item in enumerate(self.items, start=1):
            err = deep_match(inner, got, item)
            if err is None:
                continue
            if ctx.boolean_only:
                return err
            return ctx.mismatch(
                f"compared (part {pos} of {len(self.items)})",
                got,
                item,
                origin=err,
            )
        return None

    def describe(self) -> str:
        return f"all_of({', '.join(to_string(i) for i in self.items)})"

    def accepts_missing(self) -> bool:
        return True


class AnyOf(BaseOperator):
    """Matches when at least one expected value matches."""

    def __init__(self, items: tuple[Any, ...]) -> None:
        super().__init__("any_of")
        self.items = items

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        probe_ctx = ctx.as_boolean()
        for item in self.items:
            # a failed attempt must not leave its pairs recorded
            attempt = replace(probe_ctx, visited=ctx.visited.copy())
            if deep_match(attempt, got, item) is None:
                return None
        return ctx.mismatch("comparing with any_of", got, self)

    def describe(self) -> str:
        return f"any_of({', '.join(to_string(i) for i in self.items)})"

    def accepts_missing(self) -> bool:
        return True


class Ignore(BaseOperator):
    """Matches anything, None included."""

    def __init__(self) -> None:
        super().__init__("ignore")

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        return None

    def describe(self) -> str:
        return "ignore()"

    def accepts_missing(self) -> bool:
        return True


def all_of(*items: Any) -> AllOf:
    """Match got against every item.

    Example::

        match(7, all_of(gt(0), lt(10), smuggle(lambda n: n % 2, 1)))
    """
    return AllOf(items)


def any_of(*items: Any) -> AnyOf:
    """Match got against at least one item."""
    return AnyOf(items)


def ignore() -> Ignore:
    """Match any value."""
    return Ignore()
