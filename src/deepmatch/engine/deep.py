"""Recursive value matching engine.

``deep_match(ctx, got, expected)`` compares an observed value against an
expected pattern.  When ``expected`` is an Operator the whole decision is
delegated to it; otherwise the two values are compared kind by kind:

- None only matches None;
- values of different types never match;
- scalars (bool, numbers, strings) compare with ``==`` (NaN != NaN);
- tuples and lists compare item by item, a length difference being
  reported once, after the common prefix, with the extra/missing items;
- mappings compare key by key, missing and extra keys being summarised;
- sets report missing and extra members;
- structs (dataclasses, namedtuples, attribute bags) compare field by field;
- weak references and cells compare their referents;
- functions, queues and opaque objects compare by identity only;
- other objects use their own ``==``; when it does not produce a bool
  the engine returns an ``UnsupportedKindError`` node.

Composite pairs are recorded in the context's visited-pair set before
descending; a pair met again is considered matching, which guarantees
termination on self-referential data.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import Any

import numpy as np

from deepmatch.engine.chain import (
    BOOLEAN_ERROR,
    MatchError,
    RawString,
    SetSummary,
    TextSummary,
    UnsupportedKindError,
)
from deepmatch.engine.context import Context
from deepmatch.engine.kinds import (
    COMPOSITE_KINDS,
    Kind,
    cell_contents,
    kind_of,
    struct_fields,
    type_name,
)
from deepmatch.engine.order import sorted_values
from deepmatch.protocols import is_operator

__all__ = ["deep_match", "match_final"]

_IDENTITY_KINDS = frozenset({Kind.FUNCTION, Kind.CHANNEL, Kind.OPAQUE})


def _identity(value: Any) -> RawString:
    return RawString(f"<{type_name(type(value))} at 0x{id(value):x}>")


# ----------------------------------------------------------------------
# Per-kind handlers
# ----------------------------------------------------------------------


def _match_scalar(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    if got == expected:
        return None
    return ctx.mismatch("values differ", got, expected)


def _match_sequence(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    got_len, expected_len = len(got), len(expected)
    if got_len != expected_len and ctx.boolean_only:
        return BOOLEAN_ERROR

    for index, (got_item, expected_item) in enumerate(zip(got, expected)):
        err = ctx.collect_error(deep_match(ctx.add_index(index), got_item, expected_item))
        if err is not None:
            return err

    if got_len == expected_len:
        return None

    common = min(got_len, expected_len)
    return ctx.mismatch(
        f"comparing {type_name(type(got))}, from index #{common}: "
        f"got length {got_len}, expected length {expected_len}",
        summary=SetSummary(
            "item",
            missing=tuple(itertools.islice(expected, common, None)),
            extra=tuple(itertools.islice(got, common, None)),
        ),
    )


def _match_map(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    if ctx.boolean_only and len(got) != len(expected):
        return BOOLEAN_ERROR

    missing: list[Any] = []
    found = 0
    for key in sorted_values(expected.keys()):
        if key not in got:
            if ctx.boolean_only:
                return BOOLEAN_ERROR
            missing.append(key)
            continue
        found += 1
        err = ctx.collect_error(deep_match(ctx.add_map_key(key), got[key], expected[key]))
        if err is not None:
            return err

    if not missing and found == len(got):
        return None

    extra = [key for key in got if key not in expected]
    return ctx.mismatch("comparing map", summary=SetSummary.sorted("key", missing, extra))


def _match_set(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    missing = [item for item in expected if item not in got]
    extra = [item for item in got if item not in expected]
    if not missing and not extra:
        return None
    return ctx.mismatch("comparing set", summary=SetSummary.sorted("item", missing, extra))


def _match_struct(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    got_fields, expected_fields = struct_fields(got), struct_fields(expected)

    for name, expected_value in expected_fields.items():
        field_ctx = ctx.add_field(name)
        if name not in got_fields:
            err = field_ctx.mismatch(
                "missing field", RawString("<missing>"), expected_value
            )
        else:
            err = ctx.collect_error(
                deep_match(field_ctx, got_fields[name], expected_value)
            )
        if err is not None:
            return err

    extra = [name for name in got_fields if name not in expected_fields]
    if extra:
        return ctx.mismatch(
            "comparing fields", summary=SetSummary("field", extra=tuple(extra))
        )
    return None


def _match_pointer(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    got_target, expected_target = got(), expected()
    if got_target is expected_target:
        return None
    if got_target is None or expected_target is None:
        return ctx.mismatch("dead weak reference", got, expected)
    return ctx.collect_error(deep_match(ctx.add_deref(), got_target, expected_target))


def _match_boxed(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    (got_full, got_inner), (expected_full, expected_inner) = (
        cell_contents(got),
        cell_contents(expected),
    )
    if not got_full or not expected_full:
        if got_full == expected_full:
            return None
        return ctx.mismatch(
            "empty cell",
            got_inner if got_full else RawString("<empty cell>"),
            expected_inner if expected_full else RawString("<empty cell>"),
        )
    return ctx.collect_error(
        deep_match(ctx.add_field("cell_contents"), got_inner, expected_inner)
    )


def _match_identity(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    # Identical objects never get here: only distinct ones remain.
    if kind_of(got) == Kind.FUNCTION:
        return ctx.mismatch(
            "functions mismatch", summary=TextSummary("<cannot be compared>")
        )
    return ctx.mismatch(
        f"{kind_of(got)} identities differ", _identity(got), _identity(expected)
    )


def _unsupported(ctx: Context, message: str, detail: str) -> MatchError | None:
    if ctx.boolean_only:
        return BOOLEAN_ERROR
    return ctx.collect_error(
        UnsupportedKindError(message=message, summary=TextSummary(detail))
    )


def _match_value(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    name = type_name(type(got))
    try:
        equal = got == expected
    except Exception as exc:  # user-defined __eq__
        return _unsupported(
            ctx, f"don't know how to compare {name} values", f"== raised {exc!r}"
        )
    if not isinstance(equal, (bool, np.bool_)):
        return _unsupported(
            ctx,
            f"don't know how to compare {name} values",
            f"== returned {type_name(type(equal))}, not bool",
        )
    if equal:
        return None
    return ctx.mismatch("values differ", got, expected)


_HANDLERS: dict[Kind, Callable[[Context, Any, Any], MatchError | None]] = {
    Kind.BOOL: _match_scalar,
    Kind.INT: _match_scalar,
    Kind.FLOAT: _match_scalar,
    Kind.COMPLEX: _match_scalar,
    Kind.STRING: _match_scalar,
    Kind.ARRAY: _match_sequence,
    Kind.SLICE: _match_sequence,
    Kind.MAP: _match_map,
    Kind.SET: _match_set,
    Kind.STRUCT: _match_struct,
    Kind.POINTER: _match_pointer,
    Kind.BOXED: _match_boxed,
    Kind.FUNCTION: _match_identity,
    Kind.CHANNEL: _match_identity,
    Kind.OPAQUE: _match_identity,
    Kind.VALUE: _match_value,
}


# ----------------------------------------------------------------------
# Entry points
# ----------------------------------------------------------------------


def _match_operator(ctx: Context, got: Any, operator: Any) -> MatchError | None:
    ctx = ctx.with_operator(operator)
    if got is None and not operator.accepts_missing():
        return ctx.mismatch("values differ", None, operator)
    return ctx.collect_error(operator.match(ctx, got))


def deep_match(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    """Match ``got`` against ``expected`` at the position described by ``ctx``.

    Returns:
        None when matching (or when every error was accumulated in
        ``ctx.errors`` and the budget is not spent), otherwise the error
        to propagate.
    """
    if is_operator(expected):
        return _match_operator(ctx, got, expected)

    if got is None or expected is None:
        if got is None and expected is None:
            return None
        return ctx.mismatch("values differ", got, expected)

    got_type, expected_type = type(got), type(expected)
    if got_type is not expected_type:
        return ctx.mismatch(
            "type mismatch",
            RawString(type_name(got_type)),
            RawString(type_name(expected_type)),
        )

    kind = kind_of(got)
    if kind in COMPOSITE_KINDS or kind in _IDENTITY_KINDS:
        if got is expected:
            return None
        if kind in COMPOSITE_KINDS and ctx.visited.record(got, expected):
            return None

    handler = _HANDLERS.get(kind)
    if handler is None:
        return _unsupported(
            ctx, f"don't know how to compare {kind} values", type_name(got_type)
        )
    return handler(ctx, got, expected)


def match_final(ctx: Context, got: Any, expected: Any) -> MatchError | None:
    """Run a top-level match and link every accumulated error via ``next``."""
    err = deep_match(ctx, got, expected)
    if ctx.errors is None:
        return err

    errors = ctx.errors
    if err is not None and all(e is not err for e in errors):
        errors.append(err)
    if not errors:
        return None

    for previous, current in itertools.pairwise(errors):
        previous.next = current
    return errors[0]
