"""engine subpackage: the recursive matcher and its support types.

Example::

    from deepmatch.engine import deep_match, new_context

    ctx = new_context()
    err = deep_match(ctx, [1, 2], [1, 3])
    print(err.render())   # DATA[1]: values differ ...
"""

from __future__ import annotations

from deepmatch.engine.chain import (
    BOOLEAN_ERROR,
    BudgetExceeded,
    MatchError,
    RawString,
    SetSummary,
    TextSummary,
    UnsupportedKindError,
)
from deepmatch.engine.config import MAX_ERRORS_ENV, MatchConfig, default_config
from deepmatch.engine.context import Context, new_context
from deepmatch.engine.deep import deep_match, match_final
from deepmatch.engine.kinds import Kind, kind_of
from deepmatch.engine.order import compare_values, sort_key, sorted_values
from deepmatch.engine.path import Path

__all__ = [
    "BOOLEAN_ERROR",
    "MAX_ERRORS_ENV",
    "BudgetExceeded",
    "Context",
    "Kind",
    "MatchConfig",
    "MatchError",
    "Path",
    "RawString",
    "SetSummary",
    "TextSummary",
    "UnsupportedKindError",
    "compare_values",
    "deep_match",
    "default_config",
    "kind_of",
    "match_final",
    "new_context",
    "sort_key",
    "sorted_values",
]
