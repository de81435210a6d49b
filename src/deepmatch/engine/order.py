"""Deterministic total order over arbitrary, possibly cyclic, Python values.

Used to sort map keys and set members in diagnostics, and by operators
that need a stable output order.  Rules, in priority order:

- ``None`` sorts before anything else;
- values of different types sort by type name (qualname, then module);
- ``False`` before ``True``;
- numbers (``Decimal`` included) by value, NaN being the minimum (two NaNs
  compare equal).  This is NOT the matching engine's rule, where NaN != NaN;
- complex numbers by real part, then imaginary part;
- strings and bytes lexicographically;
- tuples and lists item by item, then shorter first;
- maps and sets by length, then by identity (no content tie-break);
- structs by field names, then field values in order;
- weak references and cells by referent, dead/empty first;
- functions, queues and opaque objects by identity;
- other values with their own ``<`` when it yields a bool, by identity
  otherwise (enum members by definition order, flag combinations last;
  classes by name).

Cycles: a pair met again while comparing is considered equal.
"""

from __future__ import annotations

import decimal
import enum
import functools
import math
from collections.abc import Callable, Iterable
from typing import Any

from deepmatch.engine.kinds import (
    COMPOSITE_KINDS,
    Kind,
    cell_contents,
    kind_of,
    struct_fields,
)
from deepmatch.engine.visited import VisitedPairs

__all__ = ["compare_values", "sort_key", "sorted_values"]


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _cmp_float(a: Any, b: Any, isnan: Callable[[Any], bool] = math.isnan) -> int:
    a_nan, b_nan = isnan(a), isnan(b)
    if a_nan or b_nan:
        return int(b_nan) - int(a_nan)
    return _cmp(a, b)


def _type_key(tp: type) -> tuple[str, str]:
    return (tp.__qualname__, tp.__module__)


def _cmp_identity(visited: VisitedPairs, a: Any, b: Any) -> int:
    return _cmp(id(a), id(b))


def _cmp_scalar(visited: VisitedPairs, a: Any, b: Any) -> int:
    return _cmp(a, b)


def _cmp_number(visited: VisitedPairs, a: Any, b: Any) -> int:
    return _cmp_float(a, b)


def _cmp_complex(visited: VisitedPairs, a: Any, b: Any) -> int:
    return _cmp_float(a.real, b.real) or _cmp_float(a.imag, b.imag)


def _cmp_sequence(visited: VisitedPairs, a: Any, b: Any) -> int:
    for item_a, item_b in zip(a, b):
        r = _compare(visited, item_a, item_b)
        if r != 0:
            return r
    return _cmp(len(a), len(b))


def _cmp_sized_identity(visited: VisitedPairs, a: Any, b: Any) -> int:
    # Shorter first, then fall back on identity: there is no meaningful
    # content order for maps and sets.
    return _cmp(len(a), len(b)) or _cmp(id(a), id(b))


def _cmp_struct(visited: VisitedPairs, a: Any, b: Any) -> int:
    fields_a, fields_b = struct_fields(a), struct_fields(b)
    r = _cmp(list(fields_a), list(fields_b))
    if r != 0:
        return r
    for name, value in fields_a.items():
        r = _compare(visited, value, fields_b[name])
        if r != 0:
            return r
    return 0


def _cmp_pointer(visited: VisitedPairs, a: Any, b: Any) -> int:
    target_a, target_b = a(), b()
    if target_a is target_b:
        return 0
    return _compare(visited, target_a, target_b)


def _cmp_boxed(visited: VisitedPairs, a: Any, b: Any) -> int:
    (full_a, inner_a), (full_b, inner_b) = cell_contents(a), cell_contents(b)
    if not (full_a and full_b):
        return int(full_a) - int(full_b)
    return _compare(visited, inner_a, inner_b)


def _cmp_ordered(a: Any, b: Any) -> int:
    try:
        lt, gt = a < b, b < a
    except (TypeError, ValueError, ArithmeticError):
        return _cmp(id(a), id(b))
    if not isinstance(lt, bool) or not isinstance(gt, bool):
        return _cmp(id(a), id(b))
    return int(gt) - int(lt)


def _cmp_enum(a: enum.Enum, b: enum.Enum) -> int:
    names = type(a)._member_names_

    # flag combinations are not named members: they go last, by value
    def rank(member: enum.Enum) -> int:
        return names.index(member.name) if member.name in names else len(names)

    return _cmp(rank(a), rank(b)) or _cmp_ordered(a._value_, b._value_)


def _cmp_value(visited: VisitedPairs, a: Any, b: Any) -> int:
    if isinstance(a, enum.Enum):
        return _cmp_enum(a, b)
    if isinstance(a, type):
        return _cmp(_type_key(a), _type_key(b))
    if isinstance(a, decimal.Decimal):
        return _cmp_float(a, b, isnan=decimal.Decimal.is_nan)
    return _cmp_ordered(a, b)


_HANDLERS: dict[Kind, Callable[[VisitedPairs, Any, Any], int]] = {
    Kind.BOOL: _cmp_scalar,
    Kind.INT: _cmp_scalar,
    Kind.FLOAT: _cmp_number,
    Kind.COMPLEX: _cmp_complex,
    Kind.STRING: _cmp_scalar,
    Kind.ARRAY: _cmp_sequence,
    Kind.SLICE: _cmp_sequence,
    Kind.MAP: _cmp_sized_identity,
    Kind.SET: _cmp_sized_identity,
    Kind.STRUCT: _cmp_struct,
    Kind.POINTER: _cmp_pointer,
    Kind.BOXED: _cmp_boxed,
    Kind.FUNCTION: _cmp_identity,
    Kind.CHANNEL: _cmp_identity,
    Kind.OPAQUE: _cmp_identity,
    Kind.VALUE: _cmp_value,
}


def _compare(visited: VisitedPairs, a: Any, b: Any) -> int:
    if a is None:
        return 0 if b is None else -1
    if b is None:
        return 1

    type_a, type_b = type(a), type(b)
    if type_a is not type_b:
        return _cmp(_type_key(type_a), _type_key(type_b))

    kind = kind_of(a)
    if kind in COMPOSITE_KINDS and visited.record(a, b):
        return 0
    return _HANDLERS[kind](visited, a, b)


def compare_values(a: Any, b: Any) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, with, or after ``b``.

    Each call uses its own cycle guard.
    """
    return _compare(VisitedPairs(), a, b)


# Key function for sorted(), list.sort(), min(), max(), heapq...
sort_key = functools.cmp_to_key(compare_values)


def sorted_values(values: Iterable[Any], *, reverse: bool = False) -> list[Any]:
    """Return a new list of ``values`` ordered with ``compare_values``.

    Example::

        sorted_values([float("nan"), 1.0, -1.0])   # [nan, -1.0, 1.0]
        sorted_values([{"a": 1, "b": 2}, {"z": 0}])  # [{"z": 0}, {...}]
    """
    return sorted(values, key=sort_key, reverse=reverse)
