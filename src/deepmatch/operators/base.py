"""Shared plumbing of the built-in operators.

Built-in operators inherit from ``BaseOperator`` for convenience only; the
engine never checks for it, it recognises operators through the
``deepmatch.protocols.Operator`` Protocol.
"""

from __future__ import annotations

from typing import Any

from deepmatch.engine.chain import MatchError
from deepmatch.engine.context import Context, new_context
from deepmatch.engine.deep import deep_match
from deepmatch.engine.location import Location
from deepmatch.protocols import is_operator

__all__ = ["BaseOperator", "probe", "static_type_of"]


def probe(got: Any, expected: Any) -> bool:
    """True when ``got`` matches ``expected``, in a fresh boolean-only call."""
    return deep_match(new_context(boolean_only=True), got, expected) is None


class BaseOperator:
    """Location capture, ``repr`` and protocol defaults for operators.

    Subclasses implement ``match`` and ``describe``.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.location = Location.capture(name)

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError

    def static_type(self) -> type | None:
        return None

    def accepts_missing(self) -> bool:
        return False

    def __repr__(self) -> str:
        return self.describe()


def static_type_of(value: Any) -> type | None:
    """Static type of an expected value: its own for literals, asked to operators."""
    if is_operator(value):
        return value.static_type()
    if value is None:
        return None
    return type(value)
