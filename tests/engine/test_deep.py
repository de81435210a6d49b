"""Tests for the recursive matching engine (deep_match / match_final).

Covers: per-kind comparison rules, type mismatches, None handling, length
and key reporting, error accumulation and budget, cycle termination,
identity short-circuits, unsupported comparisons, operator delegation.
"""

from __future__ import annotations

import collections
import datetime
import decimal
import math
import types
import weakref
from dataclasses import dataclass
from typing import Any

import numpy as np
import pytest

from deepmatch.engine.chain import BOOLEAN_ERROR, BudgetExceeded, MatchError, UnsupportedKindError
from deepmatch.engine.config import MatchConfig
from deepmatch.engine.context import new_context
from deepmatch.engine.deep import deep_match, match_final


@dataclass
class User:
    name: str
    age: int


@dataclass
class Admin:
    name: str
    age: int


Pair = collections.namedtuple("Pair", ["left", "right"])


class Node:
    def __init__(self, value: Any) -> None:
        self.value = value


class Weird:
    def __eq__(self, other: object) -> Any:
        return "maybe"

    __hash__ = object.__hash__


class Exploding:
    def __eq__(self, other: object) -> bool:
        raise RuntimeError("no")

    __hash__ = object.__hash__


def run(got: Any, expected: Any, max_errors: int = -1) -> MatchError | None:
    return match_final(new_context(MatchConfig(max_errors=max_errors)), got, expected)


def _cell(value: Any) -> types.CellType:
    return (lambda: value).__closure__[0]  # type: ignore[index]


class TestScalars:
    """Direct comparison of scalar kinds."""

    @pytest.mark.parametrize("value", [True, 0, 3, -2.5, 1j, "txt", b"raw"])
    def test_equal(self, value: Any) -> None:
        assert run(value, value) is None

    def test_different_ints(self) -> None:
        err = run(1, 2)
        assert err is not None
        assert err.message == "values differ"
        assert str(err.path) == "DATA"

    def test_nan_is_not_equal_to_nan(self) -> None:
        assert run(math.nan, math.nan) is not None

    def test_type_mismatch_names_types(self) -> None:
        err = run(1, 1.0)
        assert err is not None
        assert err.message == "type mismatch"
        assert err.got_string() == "int"
        assert err.expected_string() == "float"

    def test_bool_is_not_int(self) -> None:
        err = run(True, 1)
        assert err is not None
        assert err.message == "type mismatch"


class TestNone:
    """None matches only None."""

    def test_both_none(self) -> None:
        assert run(None, None) is None

    @pytest.mark.parametrize(("got", "expected"), [(None, 0), (0, None), (None, [])])
    def test_one_none(self, got: Any, expected: Any) -> None:
        err = run(got, expected)
        assert err is not None
        assert err.message == "values differ"


class TestSequences:
    """Tuples and lists."""

    def test_equal_lists(self) -> None:
        assert run([1, [2, 3]], [1, [2, 3]]) is None

    def test_item_path(self) -> None:
        err = run([1, [2, 3]], [1, [2, 4]])
        assert err is not None
        assert str(err.path) == "DATA[1][1]"

    def test_extra_items_reported_after_prefix(self) -> None:
        err = run([1, 2, 3], [1, 2])
        assert err is not None
        assert err.message == "comparing list, from index #2: got length 3, expected length 2"
        assert "Extra item: (3)" in err.render()

    def test_missing_items(self) -> None:
        err = run((1,), (1, 2, 3))
        assert err is not None
        assert "Missing 2 items: (2, 3)" in err.render()

    def test_item_and_length_errors_accumulate(self) -> None:
        err = run([0, 2, 3], [1, 2])
        assert err is not None
        assert [str(e.path) for e in err.iter_chain()] == ["DATA[0]", "DATA"]

    def test_deque_and_bytearray(self) -> None:
        assert run(collections.deque([1, 2]), collections.deque([1, 2])) is None
        assert run(bytearray(b"ab"), bytearray(b"ac")) is not None


class TestMappings:
    """Key by key comparison."""

    def test_equal(self) -> None:
        assert run({"a": 1, "b": [2]}, {"b": [2], "a": 1}) is None

    def test_value_path(self) -> None:
        err = run({"a": {"b": 1}}, {"a": {"b": 2}})
        assert err is not None
        assert str(err.path) == "DATA['a']['b']"

    def test_missing_and_extra_keys(self) -> None:
        err = run({"a": 1, "b": 2}, {"a": 1, "c": 3})
        assert err is not None
        assert err.message == "comparing map"
        text = err.render()
        assert "Missing key: ('c')" in text
        assert "Extra key: ('b')" in text

    def test_keys_are_sorted_in_summary(self) -> None:
        err = run({}, {"z": 1, "a": 2, "m": 3})
        assert err is not None
        assert "Missing 3 keys: ('a', 'm', 'z')" in err.render()

    def test_decimal_nan_keys(self) -> None:
        keys = {decimal.Decimal("NaN"): 1, decimal.Decimal(1): 2}
        assert run(dict(keys), keys) is None


class TestSets:
    """Set members."""

    def test_equal(self) -> None:
        assert run({1, 2}, {2, 1}) is None

    def test_missing_and_extra(self) -> None:
        err = run({1, 2}, {2, 3})
        assert err is not None
        assert err.message == "comparing set"
        assert "Missing item: (3)" in err.render()
        assert "Extra item: (1)" in err.render()


class TestStructs:
    """Dataclasses, namedtuples and attribute objects."""

    def test_equal_dataclasses(self) -> None:
        assert run(User("bob", 3), User("bob", 3)) is None

    def test_field_path(self) -> None:
        err = run(User("bob", 3), User("bob", 4))
        assert err is not None
        assert str(err.path) == "DATA.age"

    def test_distinct_dataclass_types(self) -> None:
        err = run(User("bob", 3), Admin("bob", 3))
        assert err is not None
        assert err.message == "type mismatch"

    def test_namedtuple(self) -> None:
        err = run(Pair(1, 2), Pair(1, 3))
        assert err is not None
        assert str(err.path) == "DATA.right"

    def test_missing_attribute(self) -> None:
        got, expected = Node(1), Node(1)
        expected.extra = 2  # type: ignore[attr-defined]
        err = run(got, expected)
        assert err is not None
        assert err.message == "missing field"
        assert str(err.path) == "DATA.extra"

    def test_unexpected_attribute(self) -> None:
        got, expected = Node(1), Node(1)
        got.extra = 2  # type: ignore[attr-defined]
        err = run(got, expected)
        assert err is not None
        assert err.message == "comparing fields"
        assert "Extra field: ('extra')" in err.render()


class TestReferences:
    """Weak references and cells."""

    def test_weakrefs_to_equal_targets(self) -> None:
        a, b = Node([1]), Node([1])
        assert run(weakref.ref(a), weakref.ref(b)) is None

    def test_weakref_deref_path(self) -> None:
        a, b = Node(1), Node(2)
        err = run(weakref.ref(a), weakref.ref(b))
        assert err is not None
        assert str(err.path) == "DATA().value"

    def test_cells(self) -> None:
        assert run(_cell([1]), _cell([1])) is None
        err = run(_cell(1), _cell(2))
        assert err is not None
        assert str(err.path) == "DATA.cell_contents"

    def test_empty_cells(self) -> None:
        assert run(types.CellType(), types.CellType()) is None
        err = run(types.CellType(), _cell(1))
        assert err is not None
        assert err.message == "empty cell"


class TestIdentityKinds:
    """Functions, channels and opaque values compare by identity."""

    def test_same_function(self) -> None:
        assert run(len, len) is None

    def test_different_functions(self) -> None:
        err = run(lambda: 1, lambda: 1)
        assert err is not None
        assert err.message == "functions mismatch"
        assert "<cannot be compared>" in err.render()

    def test_opaque(self) -> None:
        token = object()
        assert run(token, token) is None
        err = run(object(), object())
        assert err is not None
        assert err.message == "opaque identities differ"


class TestValues:
    """Objects with their own equality."""

    def test_decimal_and_dates(self) -> None:
        assert run(decimal.Decimal("1.0"), decimal.Decimal("1")) is None
        assert run(datetime.date(2024, 1, 2), datetime.date(2024, 1, 3)) is not None

    def test_non_bool_equality_is_unsupported(self) -> None:
        err = run(Weird(), Weird())
        assert isinstance(err, UnsupportedKindError)

    def test_raising_equality_is_unsupported(self) -> None:
        err = run(Exploding(), Exploding())
        assert isinstance(err, UnsupportedKindError)
        assert "RuntimeError" in err.render()

    def test_numpy_arrays_are_unsupported(self) -> None:
        err = run(np.array([1, 2]), np.array([1, 2]))
        assert isinstance(err, UnsupportedKindError)

    def test_numpy_scalars(self) -> None:
        assert run(np.float64(1.5), np.float64(1.5)) is None


class TestAccumulation:
    """Error budget handling."""

    def test_all_errors_linked(self) -> None:
        err = run([1, 2, 3], [0, 2, 4])
        assert err is not None
        assert err.count() == 2
        assert [str(e.path) for e in err.iter_chain()] == ["DATA[0]", "DATA[2]"]

    def test_single_error_budget(self) -> None:
        err = run([1, 2, 3], [0, 0, 0], max_errors=1)
        assert err is not None
        assert err.count() == 1

    def test_budget_exceeded_terminates_chain(self) -> None:
        err = run([1, 2, 3, 4, 5], [0, 0, 0, 0, 0], max_errors=2)
        assert err is not None
        chain = list(err.iter_chain())
        assert len(chain) == 3
        assert isinstance(chain[-1], BudgetExceeded)

    def test_boolean_mode_returns_sentinel(self) -> None:
        ctx = new_context(boolean_only=True)
        assert deep_match(ctx, [1, 2], [1, 3]) is BOOLEAN_ERROR


class TestCycles:
    """Self-referential values terminate."""

    def test_self_referencing_lists(self) -> None:
        a: list[Any] = [1]
        a.append(a)
        b: list[Any] = [1]
        b.append(b)
        assert run(a, b) is None

    def test_self_referencing_dicts(self) -> None:
        a: dict[str, Any] = {"n": 1}
        a["self"] = a
        b: dict[str, Any] = {"n": 1}
        b["self"] = b
        assert run(a, b) is None

    def test_mutual_references(self) -> None:
        a1, a2 = Node(1), Node(2)
        a1.other, a2.other = a2, a1  # type: ignore[attr-defined]
        b1, b2 = Node(1), Node(2)
        b1.other, b2.other = b2, b1  # type: ignore[attr-defined]
        assert run(a1, b1) is None

    def test_cycle_with_difference_still_reported(self) -> None:
        a: list[Any] = [1]
        a.append(a)
        b: list[Any] = [2]
        b.append(b)
        err = run(a, b)
        assert err is not None
        assert str(err.path) == "DATA[0]"


class TestReflexivity:
    """match(a, a) succeeds for acyclic values."""

    @pytest.mark.parametrize(
        "value",
        [
            None,
            0,
            "s",
            [1, {"a": (2, 3)}],
            {"k": {1, 2}},
            User("x", 1),
            Pair([1], {"a": None}),
            decimal.Decimal("2"),
        ],
    )
    def test_same_value(self, value: Any) -> None:
        assert run(value, value) is None

    def test_equal_copies(self) -> None:
        assert run([User("x", 1), {"a": [1.5]}], [User("x", 1), {"a": [1.5]}]) is None
