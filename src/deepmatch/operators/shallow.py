"""shallow: match by identity instead of by content.

Only reference-bearing values qualify: mappings, sets, lists and other
mutable sequences, functions, queues/generators, weak references, opaque
objects, and strings.  A weak reference is identified by its referent.  A
``memoryview`` is identified by the object exporting its buffer, so a
sub-view of a buffer shares the identity of the whole buffer even though
their lengths differ.
"""

from __future__ import annotations

import weakref
from typing import Any

from deepmatch.engine.chain import MatchError, RawString
from deepmatch.engine.context import Context
from deepmatch.engine.kinds import Kind, kind_of, type_name
from deepmatch.errors import ConstructionError
from deepmatch.operators.base import BaseOperator

__all__ = ["SHALLOW_KINDS", "Shallow", "identity_of", "shallow"]

SHALLOW_KINDS = frozenset(
    {
        Kind.MAP,
        Kind.SET,
        Kind.FUNCTION,
        Kind.CHANNEL,
        Kind.POINTER,
        Kind.SLICE,
        Kind.OPAQUE,
        Kind.STRING,
    }
)


def identity_of(value: Any) -> int:
    """Storage identity of ``value`` (0 for a dead weak reference)."""
    if isinstance(value, memoryview):
        return id(value.obj)
    if isinstance(value, weakref.ref):
        target = value()
        return 0 if target is None else id(target)
    return id(value)


class Shallow(BaseOperator):
    """Matches values sharing the identity of a reference value.

    The reference is kept alive by the operator, so its identity cannot be
    reused by another object while the operator exists.
    """

    def __init__(self, ref: Any) -> None:
        kind = kind_of(ref)
        if kind not in SHALLOW_KINDS:
            msg = (
                "usage: shallow(REFERENCE), REFERENCE must be a map, set, "
                "function, channel, pointer, slice, opaque or string value, "
                f"not a {type_name(type(ref))} ({kind})"
            )
            raise ConstructionError(msg)
        super().__init__("shallow")
        self._ref = ref
        self._kind = kind
        self._identity = identity_of(ref)

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        got_kind = kind_of(got)
        if got_kind != self._kind:
            return ctx.mismatch("bad kind", RawString(got_kind), RawString(self._kind))

        got_identity = identity_of(got)
        if got_identity != self._identity:
            return ctx.mismatch(
                f"{self._kind} pointer mismatch",
                RawString(f"0x{got_identity:x}"),
                RawString(f"0x{self._identity:x}"),
            )
        return None

    def describe(self) -> str:
        return f"({self._kind}) 0x{self._identity:x}"

    def static_type(self) -> type | None:
        return type(self._ref)


def shallow(ref: Any) -> Shallow:
    """Match any value stored at the same place as ``ref``.

    Example::

        cache = {}
        match(service.cache, shallow(cache))   # same dict object, not a copy
    """
    return Shallow(ref)
