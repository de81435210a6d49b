"""lazy: defer building an expected value until it is first needed.

Useful for recursive patterns (a node whose children match the node
pattern itself) and for patterns that are costly to build.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from deepmatch.engine.chain import MatchError, to_string
from deepmatch.engine.context import Context
from deepmatch.engine.deep import deep_match
from deepmatch.errors import ConstructionError
from deepmatch.operators.base import BaseOperator, static_type_of
from deepmatch.protocols import is_operator

__all__ = ["Lazy", "lazy"]

_UNBUILT = object()


class Lazy(BaseOperator):
    """Wrapper building its expected value exactly once, on first use.

    ``thunk`` is called at most once per wrapper even when several threads
    race on the first ``match``/``describe``/``static_type`` call; every
    caller then sees the same built value.  The thunk may return an
    operator or a plain literal.  If it raises, the exception is kept and
    raised again on every later use; the thunk is never retried.
    """

    def __init__(self, thunk: Callable[[], Any]) -> None:
        if not callable(thunk):
            msg = f"usage: lazy(THUNK), THUNK must be callable, not {thunk!r}"
            raise ConstructionError(msg)
        super().__init__("lazy")
        self._thunk = thunk
        self._built: Any = _UNBUILT
        self._failure: Exception | None = None
        self._lock = threading.Lock()

    @property
    def built(self) -> bool:
        return self._built is not _UNBUILT

    def expected(self) -> Any:
        """Return the built expected value, building it if needed."""
        if self._built is _UNBUILT:
            with self._lock:
                if self._built is _UNBUILT and self._failure is None:
                    try:
                        self._built = self._thunk()
                    except Exception as exc:
                        self._failure = exc
                        raise
        if self._failure is not None:
            raise self._failure
        return self._built

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        return deep_match(ctx, got, self.expected())

    def describe(self) -> str:
        return to_string(self.expected())

    def static_type(self) -> type | None:
        return static_type_of(self.expected())

    def accepts_missing(self) -> bool:
        value = self.expected()
        if is_operator(value):
            return value.accepts_missing()
        return True


def lazy(thunk: Callable[[], Any]) -> Lazy:
    """Build the expected value returned by ``thunk`` on first use.

    Example::

        node = lazy(lambda: {"value": gt(0), "next": any_of(None, node)})
        match({"value": 1, "next": {"value": 2, "next": None}}, node)
    """
    return Lazy(thunk)
