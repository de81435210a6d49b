"""MatchResult dataclass returned by match() calls."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from deepmatch.engine.chain import MatchError

__all__ = ["MatchResult"]


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of a match() call.

    Truthy when the values matched, so ``assert match(got, expected)``
    works; unpacks as ``matched, error = match(got, expected)``.

    Attributes:
        matched: True when got matches the expected pattern.
        error:   Head of the error chain, None when matched.
    """

    matched: bool
    error: MatchError | None = None

    def __bool__(self) -> bool:
        return self.matched

    def __iter__(self) -> Iterator[Any]:
        return iter((self.matched, self.error))

    def report(self) -> str:
        """Rendered error chain, empty when matched."""
        return "" if self.error is None else self.error.render()
