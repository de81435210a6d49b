"""Built-in matching operators.

Each public constructor validates its arguments eagerly and raises
``deepmatch.errors.ConstructionError`` on misuse.
"""

from __future__ import annotations

from deepmatch.operators.bags import BagOperator, bag_of, sub_bag_of, super_bag_of
from deepmatch.operators.base import BaseOperator
from deepmatch.operators.compare import Between, between, gt, gte, lt, lte
from deepmatch.operators.lazy import Lazy, lazy
from deepmatch.operators.logic import AllOf, AnyOf, Ignore, all_of, any_of, ignore
from deepmatch.operators.sets import SetOperator, set_of, subset_of, superset_of
from deepmatch.operators.shallow import Shallow, shallow
from deepmatch.operators.smuggle import Smuggle, smuggle
from deepmatch.operators.tag import Tag, tag

__all__ = [
    "AllOf",
    "AnyOf",
    "BagOperator",
    "BaseOperator",
    "Between",
    "Ignore",
    "Lazy",
    "SetOperator",
    "Shallow",
    "Smuggle",
    "Tag",
    "all_of",
    "any_of",
    "bag_of",
    "between",
    "gt",
    "gte",
    "ignore",
    "lazy",
    "lt",
    "lte",
    "set_of",
    "shallow",
    "smuggle",
    "sub_bag_of",
    "subset_of",
    "super_bag_of",
    "superset_of",
    "tag",
]
