"""Exceptions raised before any matching happens.

Match-time mismatches are never raised: they are returned as
``MatchError`` chains (see ``deepmatch.engine.chain``).  The exceptions
below report problems a caller can detect once, ahead of exercising a
pattern against many observed values:

- ``ConstructionError``: invalid arguments given to an operator constructor.
- ``PathSyntaxError``: malformed field-path text.
- ``PathResolutionError``: a well-formed path that cannot be followed
  through a concrete value.
"""

from __future__ import annotations

__all__ = [
    "ConstructionError",
    "DeepMatchError",
    "PathResolutionError",
    "PathSyntaxError",
]


class DeepMatchError(Exception):
    """Base class of all exceptions raised by deepmatch."""


class ConstructionError(DeepMatchError, ValueError):
    """An operator constructor received invalid arguments."""


class PathSyntaxError(DeepMatchError, ValueError):
    """A field path could not be parsed."""


class PathResolutionError(DeepMatchError, LookupError):
    """A field path could not be followed through a value."""
