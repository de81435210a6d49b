"""Compile field paths into accessors and walk them through values.

``compile_path(text)`` parses once and returns a ``FieldAccessor``;
compiled accessors are kept in a process-wide ``cachetools.LRUCache`` so
that patterns built in loops do not re-parse the same text.

Walking rules, step by step:

- a weak reference is dereferenced first (a dead one reads as None);
- a plain step requires a struct (dataclass, namedtuple, attribute object)
  owning that field;
- a bracketed step on a mapping converts the key text to the type of the
  mapping's existing keys (str when it is empty) then looks it up;
- a bracketed step on a list or tuple requires an integer index in range,
  negative indexes counting from the end.
"""

from __future__ import annotations

import re
import threading
import weakref
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from cachetools import LRUCache, cached

from deepmatch.engine.kinds import Kind, kind_of, struct_fields, type_name
from deepmatch.errors import PathResolutionError
from deepmatch.fieldpath.parser import FieldPath, FieldStep, parse_path

__all__ = ["FieldAccessor", "compile_path", "resolve"]

_CACHE_SIZE = 256

_INTEGER = re.compile(r"-?[0-9]+")


def _strict_int(text: str) -> int:
    # int() alone would also accept "+1", " 1" and "1_0"
    if not _INTEGER.fullmatch(text):
        msg = f"invalid integer {text!r}"
        raise ValueError(msg)
    return int(text)


# key type -> (converter, "is not ..." wording)
_KEY_CONVERTERS: dict[type, tuple[Callable[[str], Any], str]] = {
    int: (_strict_int, "an integer"),
    float: (float, "a float"),
    complex: (complex, "a complex number"),
    str: (str, ""),
    bytes: (str.encode, ""),
}


def _map_key_type(mapping: Mapping[Any, Any]) -> type:
    for key in mapping:
        return type(key)
    return str


def _it(path: FieldPath, upto: int) -> str:
    if upto == 0:
        return "it"
    return f"field {path.render(upto)!r}"


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """Compiled field path; calling it on a value returns the addressed value."""

    path: FieldPath

    def __call__(self, value: Any) -> Any:
        for pos, step in enumerate(self.path.steps):
            if isinstance(value, weakref.ref):
                value = value()
            if value is None:
                msg = f"{_it(self.path, pos)} is None"
                raise PathResolutionError(msg)
            value = self._step(value, pos, step)
        return value

    def __str__(self) -> str:
        return self.path.render()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _step(self, value: Any, pos: int, step: FieldStep) -> Any:
        if not step.indexed:
            return self._field(value, pos, step)
        if isinstance(value, Mapping):
            return self._map_key(value, pos, step)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            return self._index(value, pos, step)
        msg = (
            f"{_it(self.path, pos)} is a {type_name(type(value))}, "
            "but a mapping, tuple or list is expected"
        )
        raise PathResolutionError(msg)

    def _field(self, value: Any, pos: int, step: FieldStep) -> Any:
        if kind_of(value) != Kind.STRUCT:
            msg = (
                f"{_it(self.path, pos)} is a {type_name(type(value))} "
                "and should be a struct"
            )
            raise PathResolutionError(msg)
        fields = struct_fields(value)
        if step.name not in fields:
            msg = f"field {self.path.render(pos + 1)!r} not found"
            raise PathResolutionError(msg)
        return fields[step.name]

    def _map_key(self, value: Mapping[Any, Any], pos: int, step: FieldStep) -> Any:
        where = f"field {self.path.render(pos + 1)!r}, {step.name!r}"
        key_type = _map_key_type(value)

        converter = None
        for known, entry in _KEY_CONVERTERS.items():
            if issubclass(key_type, known) and not issubclass(key_type, bool):
                converter, wording = entry
                break
        if converter is None:
            msg = (
                f"{where} cannot match unsupported "
                f"{type_name(key_type)} map key type"
            )
            raise PathResolutionError(msg)

        try:
            key = converter(step.name)
        except ValueError:
            msg = (
                f"{where} is not {wording} and so cannot match "
                f"{type_name(key_type)} map key type"
            )
            raise PathResolutionError(msg) from None

        if key not in value:
            msg = f"{where} map key not found"
            raise PathResolutionError(msg)
        return value[key]

    def _index(self, value: Sequence[Any], pos: int, step: FieldStep) -> Any:
        where = f"field {self.path.render(pos + 1)!r}"
        try:
            index = _strict_int(step.name)
        except ValueError:
            msg = f"{where}, {step.name!r} is not a list/tuple index"
            raise PathResolutionError(msg) from None
        if not -len(value) <= index < len(value):
            msg = f"{where}, {index} is out of list/tuple range (len {len(value)})"
            raise PathResolutionError(msg)
        return value[index]


@cached(cache=LRUCache(maxsize=_CACHE_SIZE), lock=threading.Lock())
def compile_path(text: str) -> FieldAccessor:
    """Parse ``text`` and return a (cached) accessor for it.

    Raises:
        PathSyntaxError: ``text`` is not a valid field path.

    Example::

        get_city = compile_path("users[0].address.city")
        get_city({"users": [user]})
    """
    return FieldAccessor(parse_path(text))


def resolve(value: Any, text: str) -> Any:
    """Shorthand for ``compile_path(text)(value)``."""
    return compile_path(text)(value)
