"""tag: name a sub-pattern without changing what it matches."""

from __future__ import annotations

from typing import Any

from deepmatch.engine.chain import MatchError, to_string
from deepmatch.engine.context import Context
from deepmatch.engine.deep import deep_match
from deepmatch.errors import ConstructionError
from deepmatch.operators.base import BaseOperator, static_type_of

__all__ = ["Tag", "tag"]


class Tag(BaseOperator):
    """Transparent wrapper carrying a name.

    Matching, description and static type all delegate to the wrapped
    value.  The name only serves to address the sub-pattern from outside,
    e.g. by pattern builders that substitute tagged placeholders.
    """

    def __init__(self, tag_name: str, value: Any) -> None:
        if not isinstance(tag_name, str) or not tag_name.isidentifier():
            msg = f"usage: tag(NAME, VALUE), NAME must be a valid identifier, not {tag_name!r}"
            raise ConstructionError(msg)
        super().__init__("tag")
        self.tag_name = tag_name
        self.value = value

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        return deep_match(ctx, got, self.value)

    def describe(self) -> str:
        return to_string(self.value)

    def static_type(self) -> type | None:
        return static_type_of(self.value)

    def accepts_missing(self) -> bool:
        return True


def tag(name: str, value: Any) -> Tag:
    """Wrap ``value`` (literal or operator) under ``name``."""
    return Tag(name, value)
