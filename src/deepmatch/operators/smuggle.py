"""smuggle: transform got before matching it.

The transformation is either a callable applied to got, or a field path
(``"user.addresses[0].city"``) compiled once with
``deepmatch.fieldpath.compile_path`` and followed through got.  Failing to
follow the path, or the callable raising, is a mismatch carrying the cause,
never an exception.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from deepmatch.engine.chain import MatchError, TextSummary, to_string
from deepmatch.engine.context import Context
from deepmatch.engine.deep import deep_match
from deepmatch.errors import ConstructionError, PathResolutionError, PathSyntaxError
from deepmatch.fieldpath import FieldAccessor, compile_path
from deepmatch.operators.base import BaseOperator

__all__ = ["Smuggle", "smuggle"]


def _callable_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or "smuggle"


class Smuggle(BaseOperator):
    """Matches ``transform(got)`` against ``expected``."""

    def __init__(self, transform: str | Callable[[Any], Any], expected: Any) -> None:
        if isinstance(transform, str):
            try:
                accessor = compile_path(transform)
            except PathSyntaxError as exc:
                msg = f"usage: smuggle(FIELD_PATH, EXPECTED), {exc}"
                raise ConstructionError(msg) from exc
            self._accessor: FieldAccessor | None = accessor
            self._fn: Callable[[Any], Any] = accessor
            self._label = repr(str(accessor))
        elif callable(transform):
            self._accessor = None
            self._fn = transform
            self._label = _callable_name(transform)
        else:
            msg = (
                "usage: smuggle(FIELD_PATH|FUNCTION, EXPECTED), "
                f"not {type(transform).__name__}"
            )
            raise ConstructionError(msg)
        super().__init__("smuggle")
        self.expected = expected

    def _sub_context(self, ctx: Context) -> Context:
        if self._accessor is None:
            return ctx.add_function_call(self._label)
        rendered = str(self._accessor)
        if not rendered.startswith("["):
            rendered = "." + rendered
        return ctx.add_custom_level(rendered)

    def match(self, ctx: Context, got: Any) -> MatchError | None:
        try:
            value = self._fn(got)
        except PathResolutionError as exc:
            return ctx.mismatch(
                "cannot smuggle %% through field path",
                summary=TextSummary(str(exc)),
            )
        except Exception as exc:  # raised by user code
            return ctx.mismatch(
                "ran smuggle code with %% as argument",
                summary=TextSummary(f"{type(exc).__name__}: {exc}"),
            )
        return deep_match(self._sub_context(ctx), value, self.expected)

    def describe(self) -> str:
        return f"smuggle({self._label}, {to_string(self.expected)})"

    def accepts_missing(self) -> bool:
        return True


def smuggle(transform: str | Callable[[Any], Any], expected: Any) -> Smuggle:
    """Match ``expected`` against a field of got, or against ``transform(got)``.

    Example::

        match(order, smuggle("lines[0].quantity", gt(0)))
        match("  padded ", smuggle(str.strip, "padded"))
    """
    return Smuggle(transform, expected)
