"""Public API functions for deepmatch.

Each call builds a fresh root Context (own cycle guard, own error
accumulator), so calls never share state and may run concurrently.
"""

from __future__ import annotations

from typing import Any

from deepmatch.engine.config import MatchConfig
from deepmatch.engine.context import new_context
from deepmatch.engine.deep import deep_match, match_final
from deepmatch.result import MatchResult

__all__ = ["match", "match_boolean"]


def match(
    got: Any,
    expected: Any,
    config: MatchConfig | None = None,
) -> MatchResult:
    """Match ``got`` against ``expected`` and explain any difference.

    Args:
        got:      Observed value.
        expected: Expected value; may contain operators at any depth.
        config:   Error budget.  Defaults to the process-wide config read
                  from ``DEEPMATCH_MAX_ERRORS``.

    Returns:
        A ``MatchResult``; when not matched its ``error`` is the head of a
        chain linking up to ``max_errors`` independent mismatches.

    Example::

        result = match({"id": 3, "tags": ["a"]}, {"id": gt(0), "tags": ["b"]})
        print(result.report())
        # DATA['tags'][0]: values differ
        #      got: 'a'
        # expected: 'b'
    """
    err = match_final(new_context(config), got, expected)
    return MatchResult(matched=err is None, error=err)


def match_boolean(got: Any, expected: Any) -> bool:
    """Return True if ``got`` matches ``expected``; builds no diagnostic."""
    return deep_match(new_context(boolean_only=True), got, expected) is None
