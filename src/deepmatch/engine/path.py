"""Path: immutable record of where the engine currently is inside ``got``.

Rendering examples, starting from the default ``DATA`` root:

- FIELD     -> ``DATA.name``
- INDEX     -> ``DATA[3]``
- MAP_KEY   -> ``DATA['key']`` (key rendered with ``repr``)
- DEREF     -> ``DATA()`` (a weak reference being followed)
- CALL      -> ``fn(DATA)``
- CUSTOM    -> ``DATA`` + raw text, e.g. ``DATA.a.b[0]`` for a smuggled path
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = ["Path", "PathSegment", "SegmentKind"]


class SegmentKind(StrEnum):
    """Kinds of path segments."""

    FIELD = auto()
    INDEX = auto()
    MAP_KEY = auto()
    DEREF = auto()
    CALL = auto()
    CUSTOM = auto()


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One step of a Path.

    Attributes:
        kind:  What kind of access this segment represents.
        value: Field name, index, map key, function name or raw text.
    """

    kind: SegmentKind
    value: Any = None

    def apply(self, text: str) -> str:
        """Return ``text`` extended with this segment."""
        if self.kind == SegmentKind.FIELD:
            return f"{text}.{self.value}"
        if self.kind == SegmentKind.INDEX:
            return f"{text}[{self.value}]"
        if self.kind == SegmentKind.MAP_KEY:
            return f"{text}[{self.value!r}]"
        if self.kind == SegmentKind.DEREF:
            return f"{text}()"
        if self.kind == SegmentKind.CALL:
            return f"{self.value}({text})"
        return f"{text}{self.value}"


@dataclass(frozen=True, slots=True)
class Path:
    """Ordered, immutable sequence of segments under a root name."""

    root: str = "DATA"
    segments: tuple[PathSegment, ...] = ()

    def _add(self, kind: SegmentKind, value: Any = None) -> Path:
        return Path(self.root, (*self.segments, PathSegment(kind, value)))

    def add_field(self, name: str) -> Path:
        return self._add(SegmentKind.FIELD, name)

    def add_index(self, index: int) -> Path:
        return self._add(SegmentKind.INDEX, index)

    def add_map_key(self, key: Any) -> Path:
        return self._add(SegmentKind.MAP_KEY, key)

    def add_deref(self) -> Path:
        return self._add(SegmentKind.DEREF)

    def add_function_call(self, name: str) -> Path:
        return self._add(SegmentKind.CALL, name)

    def add_custom(self, text: str) -> Path:
        return self._add(SegmentKind.CUSTOM, text)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        text = self.root
        for segment in self.segments:
            text = segment.apply(text)
        return text
