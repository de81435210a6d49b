"""deepmatch - structural matching of Python values with explained differences."""

from __future__ import annotations

from deepmatch.api import match, match_boolean
from deepmatch.engine.chain import MatchError
from deepmatch.engine.config import MatchConfig
from deepmatch.engine.order import compare_values, sort_key, sorted_values
from deepmatch.errors import (
    ConstructionError,
    DeepMatchError,
    PathResolutionError,
    PathSyntaxError,
)
from deepmatch.fieldpath import compile_path, parse_path, resolve
from deepmatch.operators import (
    all_of,
    any_of,
    bag_of,
    between,
    gt,
    gte,
    ignore,
    lazy,
    lt,
    lte,
    set_of,
    shallow,
    smuggle,
    sub_bag_of,
    subset_of,
    super_bag_of,
    superset_of,
    tag,
)
from deepmatch.protocols import Operator
from deepmatch.result import MatchResult

__version__: str = "0.1.0"
__all__: list[str] = [
    "ConstructionError",
    "DeepMatchError",
    "MatchConfig",
    "MatchError",
    "MatchResult",
    "Operator",
    "PathResolutionError",
    "PathSyntaxError",
    "all_of",
    "any_of",
    "bag_of",
    "between",
    "compare_values",
    "compile_path",
    "gt",
    "gte",
    "ignore",
    "lazy",
    "lt",
    "lte",
    "match",
    "match_boolean",
    "parse_path",
    "resolve",
    "set_of",
    "shallow",
    "smuggle",
    "sort_key",
    "sorted_values",
    "sub_bag_of",
    "subset_of",
    "super_bag_of",
    "superset_of",
    "tag",
]
