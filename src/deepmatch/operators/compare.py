"""Ordering operators: between, gt, gte, lt, lte.

Numbers (any ``numbers.Real`` but bool, and ``Decimal``) compare with
each other whatever their concrete type, so ``between(1, 4)`` accepts
``2.5`` and ``Decimal("3")``.  Any other bound only accepts got values of
its exact type, compared with ``<``.
"""

from __future__ import annotations

import decimal
import numbers
from typing import Any

from deepmatch.engine.chain import MatchError, RawString, to_string
from deepmatch.engine.context import Context
from deepmatch.engine.kinds import type_name
from deepmatch.errors import ConstructionError
from deepmatch.operators.base import BaseOperator

__all__ = ["BOUNDS", "Between", "between", "gt", "gte", "lt", "lte"]

# bounds text -> (lower inclusive, upper inclusive)
BOUNDS: dict[str, tuple[bool, bool]] = {
    "[]": (True, True),
    "[[": (True, False),
    "]]": (False, True),
    "][": (False, False),
}

_MISSING = object()


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, decimal.Decimal))


def _check_bound(name: str, bound: Any) -> None:
    if bound is None:
        msg = f"usage: {name}(...), a bound cannot be None"
        raise ConstructionError(msg)
    if _is_number(bound):
        if bound != bound:
            msg = f"usage: {name}(...), a bound cannot be NaN"
            raise ConstructionError(msg)
        return
    try:
        bound < bound  # noqa: B015
    except TypeError:
        msg = f"usage: {name}(...), {type_name(type(bound))} values cannot be ordered"
        raise ConstructionError(msg) from None


def _same_family(a: Any, b: Any) -> bool:
    if _is_number(a):
        return _is_number(b)
    return type(a) is type(b)


class Between(BaseOperator):
    """Matches values inside an interval; either side may be unbounded."""

    def __init__(
        self,
        name: str,
        lo: Any = _MISSING,
        hi: Any = _MISSING,
        *,
        lo_inclusive: bool = True,
        hi_inclusive: bool = True,
    ) -> None:
        for bound in (lo, hi):
            if bound is not _MISSING:
                _check_bound(name, bound)
        if lo is not _MISSING and hi is not _MISSING:
            if not _same_family(lo, hi):
                msg = (
                    f"usage: {name}(LO, HI), LO and HI must be of the same type, "
                    f"got {type_name(type(lo))} and {type_name(type(hi))}"
                )
                raise ConstructionError(msg)
            if hi < lo:
                lo, hi = hi, lo
                lo_inclusive, hi_inclusive = hi_inclusive, lo_inclusive

        super().__init__(name)
        self.lo = lo
        self.hi = hi
        self.lo_inclusive = lo_inclusive
        self.hi_inclusive = hi_inclusive

    @property
    def _reference(self) -> Any:
        return self.lo if self.lo is not _MISSING else self.hi

    def _in_range(self, got: Any) -> bool:
        if self.lo is not _MISSING:
            if got < self.lo or (not self.lo_inclusive and not self.lo < got):
                return False
        if self.hi is not _MISSING:
            if self.hi < got or (not self.hi_inclusive and not got < self.hi):
                return False
        return True

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        if not _same_family(self._reference, got):
            return ctx.mismatch(
                "type mismatch",
                RawString(type_name(type(got))),
                RawString(self._expected_type()),
            )
        if got != got:  # NaN
            return ctx.mismatch("values differ", got, self)
        if self._in_range(got):
            return None
        return ctx.mismatch("values differ", got, self)

    def _expected_type(self) -> str:
        if _is_number(self._reference):
            return "number"
        return type_name(type(self._reference))

    def describe(self) -> str:
        lo_op = "<=" if self.lo_inclusive else "<"
        hi_op = "<=" if self.hi_inclusive else "<"
        if self.lo is _MISSING:
            return f"{hi_op} {to_string(self.hi)}"
        if self.hi is _MISSING:
            return f"{'>=' if self.lo_inclusive else '>'} {to_string(self.lo)}"
        return f"{to_string(self.lo)} {lo_op} got {hi_op} {to_string(self.hi)}"

    def static_type(self) -> type | None:
        if _is_number(self._reference):
            return None
        return type(self._reference)


def between(lo: Any, hi: Any, bounds: str = "[]") -> Between:
    """Match values between ``lo`` and ``hi``.

    ``bounds`` tells which ends are included: ``"[]"`` both, ``"[["`` only
    ``lo``, ``"]]"`` only ``hi``, ``"]["`` none.  Swapped bounds are put
    back in order.

    Example::

        match(3.5, between(1, 4))          # matches
        match(4, between(1, 4, "[["))      # fails
    """
    if bounds not in BOUNDS:
        msg = f"usage: between(LO, HI, BOUNDS), BOUNDS must be one of {', '.join(BOUNDS)}, not {bounds!r}"
        raise ConstructionError(msg)
    lo_inclusive, hi_inclusive = BOUNDS[bounds]
    return Between(
        "between", lo, hi, lo_inclusive=lo_inclusive, hi_inclusive=hi_inclusive
    )


def gt(bound: Any) -> Between:
    """Match values strictly greater than ``bound``."""
    return Between("gt", lo=bound, lo_inclusive=False)


def gte(bound: Any) -> Between:
    """Match values greater than or equal to ``bound``."""
    return Between("gte", lo=bound)


def lt(bound: Any) -> Between:
    """Match values strictly lower than ``bound``."""
    return Between("lt", hi=bound, hi_inclusive=False)


def lte(bound: Any) -> Between:
    """Match values lower than or equal to ``bound``."""
    return Between("lte", hi=bound)
