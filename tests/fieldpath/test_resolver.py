"""Tests for compiled field path accessors.

Covers: struct fields, mapping keys converted to the mapping's key type,
list/tuple indexes, weak references, None, every resolution error
message, the compiled accessor cache.
"""

from __future__ import annotations

import collections
import re
import weakref
from dataclasses import dataclass
from typing import Any

import pytest

from deepmatch.errors import PathResolutionError, PathSyntaxError
from deepmatch.fieldpath import FieldAccessor, compile_path, resolve


@dataclass
class Inner:
    path: Any = "x"


@dataclass
class Build:
    field: Any = None
    iface: Any = None


class Holder:
    def __init__(self, value: Any) -> None:
        self.value = value


Point = collections.namedtuple("Point", ["x", "y"])


def fails(value: Any, text: str, message: str) -> None:
    with pytest.raises(PathResolutionError, match=f"^{re.escape(message)}$"):
        resolve(value, text)


class TestResolve:
    """Successful walks."""

    def test_struct_fields(self) -> None:
        assert resolve(Build(field=Inner("deep")), "field.path") == "deep"

    def test_mapping_keys(self) -> None:
        assert resolve({"a": {"b": 1}}, "[a][b]") == 1

    def test_int_keys(self) -> None:
        assert resolve(Build(iface={1: "one"}), "iface[1]") == "one"

    def test_float_and_bytes_keys(self) -> None:
        assert resolve({1.5: "x"}, "[1.5]") == "x"
        assert resolve({b"k": "v"}, "[k]") == "v"

    def test_list_index(self) -> None:
        assert resolve([10, 20, 30], "[1]") == 20

    def test_negative_index(self) -> None:
        assert resolve((10, 20, 30), "[-1]") == 30

    def test_namedtuple_field_and_index(self) -> None:
        assert resolve(Point(1, 2), "y") == 2
        assert resolve(Point(1, 2), "[0]") == 1

    def test_weakref_dereferenced(self) -> None:
        target = Holder([1, 2])
        assert resolve(Holder(weakref.ref(target)), "value.value[1]") == 2

    def test_dotted_mapping_key(self) -> None:
        assert resolve({"a.b": 3}, "[a.b]") == 3


class TestStructErrors:
    """Plain steps need structs."""

    def test_not_a_struct_after_steps(self) -> None:
        fails(Build(field=Inner("x")), "field.path.bad", "field 'field.path' is a str and should be a struct")

    def test_root_not_a_struct(self) -> None:
        fails(123, "field.path", "it is a int and should be a struct")

    def test_field_not_found(self) -> None:
        fails(Build(), "field.unknown", "field 'field' is None")
        fails(Build(field=Inner()), "field.unknown", "field 'field.unknown' not found")

    def test_mapping_needs_brackets(self) -> None:
        fails({"a": 1}, "a", "it is a dict and should be a struct")


class TestMapErrors:
    """Key conversion to the mapping's key type."""

    def test_not_an_integer(self) -> None:
        fails(
            Build(iface={1: Build()}),
            "iface[str].field",
            "field 'iface[str]', 'str' is not an integer and so cannot match int map key type",
        )

    def test_not_a_float(self) -> None:
        fails(
            Build(iface={1.5: Build()}),
            "iface[str].field",
            "field 'iface[str]', 'str' is not a float and so cannot match float map key type",
        )

    def test_not_a_complex(self) -> None:
        fails(
            Build(iface={1j: Build()}),
            "iface[str].field",
            "field 'iface[str]', 'str' is not a complex number and so cannot match complex map key type",
        )

    def test_unsupported_key_type(self) -> None:
        fails(
            Build(iface={(1, 2): Build()}),
            "iface[str].field",
            "field 'iface[str]', 'str' cannot match unsupported tuple map key type",
        )

    def test_bool_keys_unsupported(self) -> None:
        fails({True: 1}, "[true]", "field '[true]', 'true' cannot match unsupported bool map key type")

    @pytest.mark.parametrize("text", ["1_0", "+1", " 1"])
    def test_loose_integer_keys_rejected(self, text: str) -> None:
        fails(
            {1: "a", 10: "b"},
            f"[{text}]",
            f"field '[{text}]', {text!r} is not an integer and so cannot match int map key type",
        )

    def test_key_not_found(self) -> None:
        fails(Build(iface={}), "iface[str].field", "field 'iface[str]', 'str' map key not found")


class TestSequenceErrors:
    """Indexes in lists and tuples."""

    def test_not_an_index(self) -> None:
        fails(Build(iface=[]), "iface[str].field", "field 'iface[str]', 'str' is not a list/tuple index")

    @pytest.mark.parametrize("text", ["1_0", "+1", " 1", "1 "])
    def test_loose_integer_spellings_rejected(self, text: str) -> None:
        values = list(range(12))
        fails(values, f"[{text}]", f"field '[{text}]', {text!r} is not a list/tuple index")

    def test_out_of_range(self) -> None:
        fails(Build(iface=[1, 2, 3]), "iface[18].field", "field 'iface[18]', 18 is out of list/tuple range (len 3)")

    def test_not_a_container(self) -> None:
        fails(Build(iface=42), "iface[18].field", "field 'iface' is a int, but a mapping, tuple or list is expected")

    def test_root_not_a_container(self) -> None:
        fails(42, "[18].field", "it is a int, but a mapping, tuple or list is expected")

    def test_strings_are_not_containers(self) -> None:
        fails("abc", "[0]", "it is a str, but a mapping, tuple or list is expected")


class TestNone:
    """None values stop the walk."""

    def test_root_none(self) -> None:
        fails(None, "a", "it is None")

    def test_dead_weakref(self) -> None:
        target = Holder(1)
        ref = weakref.ref(target)
        del target
        fails(Holder(ref), "value.value", "field 'value' is None")


class TestCompilePath:
    """Compilation and caching."""

    def test_returns_accessor(self) -> None:
        accessor = compile_path("x[0]")
        assert isinstance(accessor, FieldAccessor)
        assert str(accessor) == "x[0]"
        assert accessor(Point([5], None)) == 5

    def test_cached(self) -> None:
        assert compile_path("cached.path") is compile_path("cached.path")

    def test_syntax_error(self) -> None:
        with pytest.raises(PathSyntaxError):
            compile_path("bad[path")

    def test_accessor_reusable(self) -> None:
        get_x = compile_path("x")
        assert [get_x(Point(i, 0)) for i in range(3)] == [0, 1, 2]
