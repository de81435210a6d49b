"""MatchError chain: the structured result of a failed match.

One ``MatchError`` node is produced at each point of failure.  Independent
mismatches found during the same top-level call are linked through
``next``; an operator that ran an inner match to reach its own verdict may
attach the inner chain as ``origin``.  Once returned to the caller a chain
is read-only.

Rendering order (a contract consumers may rely on)::

    message (with path) -> got/expected or summary -> origin
        -> operator location -> next sibling

Text styling (colors) is left to external formatters; ``render`` produces
plain text.
"""

from __future__ import annotations

import pprint
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Protocol

if TYPE_CHECKING:
    from deepmatch.engine.location import Location
    from deepmatch.engine.path import Path

__all__ = [
    "BOOLEAN_ERROR",
    "BudgetExceeded",
    "MatchError",
    "RawString",
    "SetSummary",
    "Summary",
    "TextSummary",
    "UnsupportedKindError",
    "to_string",
]


class RawString(str):
    """A string rendered as-is in diagnostics (no quotes)."""

    __slots__ = ()


def to_string(value: Any) -> str:
    """Render a got/expected value for diagnostics.

    ``RawString`` values are emitted verbatim, operators (anything with a
    ``describe`` method) through their description, everything else with
    ``pprint.pformat`` which is safe on self-referential containers.
    """
    if isinstance(value, RawString):
        return str(value)
    describe = getattr(value, "describe", None)
    if callable(describe) and not isinstance(value, type):
        return str(describe())
    return pprint.pformat(value, width=72, sort_dicts=False)


def _indent(text: str, prefix: str) -> str:
    return text.replace("\n", "\n" + prefix)


class Summary(Protocol):
    """Alternate renderer replacing the got/expected lines of an error."""

    def render(self, prefix: str = "") -> str: ...


@dataclass(frozen=True, slots=True)
class TextSummary:
    """A single pre-formatted summary line, e.g. ``cannot be compared``."""

    text: str

    def render(self, prefix: str = "") -> str:
        return prefix + _indent(self.text, prefix)


@dataclass(frozen=True, slots=True)
class SetSummary:
    """Missing / extra items (or keys) of a container comparison.

    Attributes:
        noun:    "item" or "key".
        missing: Expected entries absent from got.
        extra:   Entries of got that were not expected.
    """

    noun: str = "item"
    missing: tuple[Any, ...] = ()
    extra: tuple[Any, ...] = ()

    @classmethod
    def sorted(
        cls,
        noun: str,
        missing: Sequence[Any] = (),
        extra: Sequence[Any] = (),
    ) -> SetSummary:
        """Build a summary whose entries are ordered with the total order."""
        from deepmatch.engine.order import sorted_values

        return cls(noun, tuple(sorted_values(missing)), tuple(sorted_values(extra)))

    def render(self, prefix: str = "") -> str:
        heads: list[tuple[str, str]] = []
        for label, values in (("Missing", self.missing), ("Extra", self.extra)):
            if not values:
                continue
            if len(values) == 1:
                head = f"{label} {self.noun}"
            else:
                head = f"{label} {len(values)} {self.noun}s"
            body = ", ".join(to_string(v) for v in values)
            heads.append((head, body))

        width = max((len(h) for h, _ in heads), default=0)
        return "\n".join(f"{prefix}{h.rjust(width)}: ({b})" for h, b in heads)


@dataclass(eq=False)
class MatchError:
    """One mismatch record in an error chain.

    Attributes:
        message:  Description of the failure.  A ``%%`` marker is replaced
                  by the path when rendering; otherwise the path is prefixed.
        got:      Observed value (ignored when ``summary`` is set).
        expected: Expected value (ignored when ``summary`` is set).
        summary:  Alternate renderer used instead of got/expected.
        origin:   Inner chain that caused this error (causal link).
        next:     Next independent error at the same level (sibling link).
        path:     Where in got the failure happened; bound at collection.
        location: Construction site of the operator that raised the error.
    """

    terminal: ClassVar[bool] = False

    message: str = ""
    got: Any = None
    expected: Any = None
    summary: Summary | None = None
    origin: MatchError | None = None
    next: MatchError | None = None
    path: Path | None = field(default=None, repr=False)
    location: Location | None = field(default=None, repr=False)

    def got_string(self) -> str:
        return "" if self.summary is not None else to_string(self.got)

    def expected_string(self) -> str:
        return "" if self.summary is not None else to_string(self.expected)

    def summary_string(self) -> str:
        return "" if self.summary is None else self.summary.render()

    def iter_chain(self) -> Iterator[MatchError]:
        """Yield this error then each ``next`` sibling."""
        err: MatchError | None = self
        while err is not None:
            yield err
            err = err.next

    def count(self) -> int:
        """Number of errors in the sibling chain starting here."""
        return sum(1 for _ in self.iter_chain())

    def render(self, prefix: str = "") -> str:
        """Render the whole chain as plain text, each line starting with prefix."""
        return "\n".join(err._render_one(prefix) for err in self.iter_chain())

    def _render_one(self, prefix: str) -> str:
        if self is BOOLEAN_ERROR:
            return ""
        if self.terminal and self.path is None:
            return prefix + self.message

        eol = "\n" + prefix
        path = str(self.path) if self.path is not None else "DATA"
        if "%%" in self.message:
            title = self.message.replace("%%", path, 1)
        else:
            title = f"{path}: {self.message}"
        parts = [prefix, title]

        if self.summary is not None:
            parts.append("\n" + self.summary.render(prefix + "\t"))
        else:
            pad = prefix + "\t          "
            parts.append(f"{eol}\t     got: {_indent(self.got_string(), pad)}")
            parts.append(f"{eol}\texpected: {_indent(self.expected_string(), pad)}")

        if self.origin is not None:
            parts.append(f"{eol}Originates from following error:\n")
            parts.append(self.origin.render(prefix + "\t"))

        if self.location is not None and (
            self.next is None or self.next.location != self.location
        ):
            parts.append(f"{eol}[under operator {self.location}]")

        return "".join(parts)

    def __str__(self) -> str:
        return self.render()


class BudgetExceeded(MatchError):
    """Terminal node appended once the error budget is exhausted."""

    terminal = True

    def __init__(self) -> None:
        super().__init__(
            message="Too many errors (use DEEPMATCH_MAX_ERRORS=-1 to see all)"
        )


class UnsupportedKindError(MatchError):
    """Terminal node: the engine has no comparison rule for these values.

    Distinct from a mismatch: it means the answer is unknown, not "no".
    """

    terminal = True


# Returned in boolean-only mode instead of building any diagnostic.
BOOLEAN_ERROR = MatchError()
