"""Tests for the smuggle operator.

Covers: field-path and callable transforms, error paths, resolution and
call failures reported as mismatches, construction errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from deepmatch import ConstructionError, gt, match, smuggle


@dataclass
class Line:
    sku: str
    quantity: int


@dataclass
class Order:
    lines: list[Line] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)


ORDER = Order(lines=[Line("a-1", 2), Line("b-2", 0)], meta={"source": "web"})


class TestFieldPath:
    """String transforms are field paths."""

    def test_matches(self) -> None:
        assert match(ORDER, smuggle("lines[0].quantity", gt(0)))
        assert match(ORDER, smuggle("meta[source]", "web"))

    def test_error_path_extends_with_field_path(self) -> None:
        result = match(ORDER, smuggle("lines[1].quantity", gt(0)))
        assert result.error is not None
        assert str(result.error.path) == "DATA.lines[1].quantity"

    def test_leading_bracket(self) -> None:
        result = match([1, 2], smuggle("[1]", 3))
        assert result.error is not None
        assert str(result.error.path) == "DATA[1]"

    def test_resolution_failure_is_a_mismatch(self) -> None:
        result = match(ORDER, smuggle("lines[5].quantity", 1))
        assert not result
        assert result.error is not None
        assert result.error.message == "cannot smuggle %% through field path"
        assert "out of list/tuple range (len 2)" in result.report()

    def test_none(self) -> None:
        result = match(None, smuggle("a.b", 1))
        assert "it is None" in result.report()

    def test_syntax_error_at_construction(self) -> None:
        with pytest.raises(ConstructionError, match="cannot find final"):
            smuggle("lines[0", 1)


class TestCallable:
    """Callable transforms."""

    def test_matches(self) -> None:
        assert match("  padded ", smuggle(str.strip, "padded"))

    def test_error_path_names_function(self) -> None:
        result = match(" x ", smuggle(str.strip, "y"))
        assert result.error is not None
        assert str(result.error.path) == "str.strip(DATA)"

    def test_raising_function_is_a_mismatch(self) -> None:
        result = match(0, smuggle(lambda n: 1 / n, 1))
        assert not result
        assert "ZeroDivisionError" in result.report()

    def test_nested(self) -> None:
        assert match({"items": [3, 1, 2]}, {"items": smuggle(sorted, [1, 2, 3])})

    def test_not_callable(self) -> None:
        with pytest.raises(ConstructionError, match="usage: smuggle"):
            smuggle(3, 1)  # type: ignore[arg-type]


class TestDescribe:
    """Descriptions."""

    def test_path(self) -> None:
        assert smuggle("a.b", gt(1)).describe() == "smuggle('a.b', > 1)"

    def test_callable(self) -> None:
        assert smuggle(len, 3).describe() == "smuggle(len, 3)"

    def test_accepts_missing(self) -> None:
        assert smuggle(len, 0).accepts_missing()
