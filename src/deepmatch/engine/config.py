"""MatchConfig: process-wide matching configuration.

MatchConfig is a frozen (immutable) dataclass.  The process default is
read once from the ``DEEPMATCH_MAX_ERRORS`` environment variable and never
changes afterwards; individual calls may pass their own config instead.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass

__all__ = ["MAX_ERRORS_ENV", "MatchConfig", "default_config"]

MAX_ERRORS_ENV = "DEEPMATCH_MAX_ERRORS"


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Immutable configuration of the matching engine.

    Attributes:
        max_errors: Maximum number of mismatches accumulated by one call
            before a terminal "too many errors" node is appended.  A
            negative value means unlimited; 1 stops at the first error.
    """

    max_errors: int = 10

    def __post_init__(self) -> None:
        if isinstance(self.max_errors, bool) or not isinstance(self.max_errors, int):
            msg = f"max_errors must be an int, got {self.max_errors!r}"
            raise TypeError(msg)
        if self.max_errors == 0:
            msg = "max_errors must be negative (unlimited) or >= 1, got 0"
            raise ValueError(msg)

    @property
    def unlimited(self) -> bool:
        return self.max_errors < 0

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> MatchConfig:
        """Build a config from ``DEEPMATCH_MAX_ERRORS`` (defaults when unset)."""
        env = os.environ if environ is None else environ
        raw = env.get(MAX_ERRORS_ENV, "").strip()
        if not raw:
            return cls()
        try:
            max_errors = int(raw)
        except ValueError:
            msg = f"{MAX_ERRORS_ENV} must be an integer, got {raw!r}"
            raise ValueError(msg) from None
        return cls(max_errors=max_errors)


@functools.cache
def default_config() -> MatchConfig:
    """Return the process-wide config, reading the environment only once."""
    return MatchConfig.from_env()
