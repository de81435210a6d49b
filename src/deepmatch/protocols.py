"""Operator Protocol: the extension point of the matching engine.

Defines the structural interface every matching strategy must satisfy.
Users can plug in custom operators without inheriting from any base class:
any object with conformant ``match``, ``describe``, ``static_type`` and
``accepts_missing`` methods passes ``isinstance`` checks and is delegated
to wherever it appears inside an expected pattern.

Example::

    from deepmatch import match
    from deepmatch.engine.chain import MatchError

    class IsEven:
        def match(self, ctx, got):
            if isinstance(got, int) and got % 2 == 0:
                return None
            return ctx.collect_error(
                MatchError(message="not even", got=got, expected=self)
            )

        def describe(self) -> str:
            return "IsEven()"

        def static_type(self):
            return int

        def accepts_missing(self) -> bool:
            return False

    assert match([2, 4], [IsEven(), IsEven()]).matched
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from deepmatch.engine.chain import MatchError
    from deepmatch.engine.context import Context

__all__ = ["Operator", "is_operator"]


@runtime_checkable
class Operator(Protocol):
    """Structural protocol for matching operators.

    - ``match(ctx, got)`` returns None on success.  On failure it returns
      ``ctx.collect_error(err)`` (or ``BOOLEAN_ERROR`` when
      ``ctx.boolean_only``), never raises for a mismatch.
    - ``describe()`` returns a short human readable form of the operator.
    - ``static_type()`` returns the type of got the operator expects, or
      None when it accepts several types.
    - ``accepts_missing()`` returns True when the operator wants to be
      called with a ``None`` got, False to let the engine report it.

    An optional ``location`` attribute (``deepmatch.engine.location.Location``)
    is used to point diagnostics at the operator construction site.
    """

    def match(self, ctx: Context, got: Any) -> MatchError | None: ...

    def describe(self) -> str: ...

    def static_type(self) -> type | None: ...

    def accepts_missing(self) -> bool: ...


def is_operator(value: Any) -> bool:
    """True when ``value`` is an Operator instance (classes never are)."""
    return not isinstance(value, type) and isinstance(value, Operator)
