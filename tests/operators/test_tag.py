"""Tests for the tag operator.

Covers: transparent delegation of match/describe/static_type, name
validation at construction.
"""

from __future__ import annotations

import pytest

from deepmatch import ConstructionError, gt, match, tag


class TestDelegation:
    """A tag behaves like the value it wraps."""

    def test_literal(self) -> None:
        assert match(3, tag("count", 3))
        assert not match(4, tag("count", 3))

    def test_operator(self) -> None:
        assert match(3, tag("count", gt(2)))

    def test_describe(self) -> None:
        assert tag("count", gt(2)).describe() == "> 2"
        assert tag("count", "x").describe() == "'x'"

    def test_static_type(self) -> None:
        assert tag("count", 3).static_type() is int
        assert tag("count", gt(2)).static_type() is None
        assert tag("nothing", None).static_type() is None

    def test_name_kept(self) -> None:
        assert tag("count", 3).tag_name == "count"

    def test_none_matches_none(self) -> None:
        assert match(None, tag("empty", None))
        assert not match(None, tag("count", 3))

    def test_nested_error_path(self) -> None:
        result = match({"a": [1, 2]}, {"a": tag("pair", [1, 3])})
        assert result.error is not None
        assert str(result.error.path) == "DATA['a'][1]"


class TestValidation:
    """Tag names must be identifiers."""

    @pytest.mark.parametrize("name", ["", "1st", "with space", "a-b"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(ConstructionError, match="identifier"):
            tag(name, 1)

    def test_non_string_name(self) -> None:
        with pytest.raises(ConstructionError):
            tag(12, 1)  # type: ignore[arg-type]

    def test_construction_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            tag("", 1)
