"""Context: traversal state threaded through every engine and operator call.

A Context is immutable; descending into a value derives a new Context with
one more path segment.  The visited-pair set and the error accumulator are
shared by every Context derived from the same root, i.e. by one top-level
call, and by nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from deepmatch.engine.chain import BOOLEAN_ERROR, BudgetExceeded, MatchError, Summary
from deepmatch.engine.config import MatchConfig, default_config
from deepmatch.engine.path import Path
from deepmatch.engine.visited import VisitedPairs

__all__ = ["Context", "new_context"]


@dataclass(frozen=True, slots=True, eq=False)
class Context:
    """State of one matching traversal at one position.

    Attributes:
        path:         Where the engine currently is inside got.
        visited:      Cycle guard shared by the whole top-level call.
        errors:       Shared accumulator of collected errors, or None when
                      only the first error is wanted.
        max_errors:   Error budget (negative: unlimited).
        boolean_only: When True no diagnostic is built; the first mismatch
                      returns ``BOOLEAN_ERROR``.
        cur_operator: Operator currently in charge, for error locations.
    """

    path: Path = field(default_factory=Path)
    visited: VisitedPairs = field(default_factory=VisitedPairs)
    errors: list[MatchError] | None = None
    max_errors: int = 1
    boolean_only: bool = False
    cur_operator: Any = None

    @property
    def depth(self) -> int:
        return len(self.path)

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def add_field(self, name: str) -> Context:
        return replace(self, path=self.path.add_field(name))

    def add_index(self, index: int) -> Context:
        return replace(self, path=self.path.add_index(index))

    def add_map_key(self, key: Any) -> Context:
        return replace(self, path=self.path.add_map_key(key))

    def add_deref(self) -> Context:
        return replace(self, path=self.path.add_deref())

    def add_function_call(self, name: str) -> Context:
        return replace(self, path=self.path.add_function_call(name))

    def add_custom_level(self, text: str) -> Context:
        return replace(self, path=self.path.add_custom(text))

    def with_operator(self, operator: Any) -> Context:
        return replace(self, cur_operator=operator)

    def reset_errors(self) -> Context:
        """Context reporting only its first error, for inner probing."""
        return replace(self, errors=None, max_errors=1)

    def as_boolean(self) -> Context:
        """Context in boolean-only mode sharing this one's cycle guard."""
        return replace(self, errors=None, max_errors=1, boolean_only=True)

    # ------------------------------------------------------------------
    # Error collection
    # ------------------------------------------------------------------

    def collect_error(self, err: MatchError | None) -> MatchError | None:
        """Bind ``err`` to this position and account for it.

        Returns:
            - None when the error was accumulated and matching may go on;
            - the terminal ``BudgetExceeded`` node when the budget is spent;
            - ``err`` itself when not accumulating, when it is terminal, or
              when it was already collected by a deeper context.
        """
        if err is None or err is BOOLEAN_ERROR or isinstance(err, BudgetExceeded):
            return err
        if err.path is not None:
            return err

        err.path = self.path
        if err.location is None:
            err.location = getattr(self.cur_operator, "location", None)

        if self.errors is None:
            return err

        self.errors.append(err)
        if err.terminal:
            return err
        if self.max_errors >= 0 and len(self.errors) >= self.max_errors:
            too_many = BudgetExceeded()
            self.errors.append(too_many)
            return too_many
        return None

    def mismatch(
        self,
        message: str,
        got: Any = None,
        expected: Any = None,
        *,
        summary: Summary | None = None,
        origin: MatchError | None = None,
    ) -> MatchError | None:
        """Report a mismatch at this position.

        In boolean-only mode no error is built and ``BOOLEAN_ERROR`` is
        returned; otherwise the new error goes through ``collect_error``.
        """
        if self.boolean_only:
            return BOOLEAN_ERROR
        return self.collect_error(
            MatchError(
                message=message,
                got=got,
                expected=expected,
                summary=summary,
                origin=origin,
            )
        )


def new_context(
    config: MatchConfig | None = None,
    *,
    boolean_only: bool = False,
    root: str = "DATA",
) -> Context:
    """Build the root Context of one top-level call.

    Args:
        config:       Error budget source.  Defaults to ``default_config()``.
        boolean_only: Skip all diagnostic construction.
        root:         Name of the root of the path in diagnostics.
    """
    if boolean_only:
        return Context(path=Path(root), boolean_only=True)

    cfg = config if config is not None else default_config()
    errors: list[MatchError] | None = [] if cfg.max_errors != 1 else None
    return Context(path=Path(root), errors=errors, max_errors=cfg.max_errors)
