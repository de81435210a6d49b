"""Kind StrEnum and ``kind_of`` classifier for arbitrary Python values.

The matching engine and the total-order comparator both dispatch on a
closed set of kinds rather than on concrete types.  ``kind_of`` maps any
Python object onto exactly one of them.
"""

from __future__ import annotations

import array
import asyncio
import collections
import dataclasses
import enum
import functools
import numbers
import queue
import types
import weakref
from collections.abc import Mapping
from enum import StrEnum, auto
from typing import Any

__all__ = [
    "COMPOSITE_KINDS",
    "Kind",
    "cell_contents",
    "kind_of",
    "struct_fields",
    "type_name",
]


class Kind(StrEnum):
    """Enumeration of the value kinds the engine knows how to handle.

    StrEnum values are the lowercased member names:
    - INVALID  -> "invalid"  : ``None``, the absent value
    - BOOL     -> "bool"
    - INT      -> "int"      : any ``numbers.Integral`` except bool
    - FLOAT    -> "float"    : any other ``numbers.Real``
    - COMPLEX  -> "complex"  : any other ``numbers.Complex``
    - STRING   -> "string"   : str and bytes
    - ARRAY    -> "array"    : plain tuples
    - SLICE    -> "slice"    : list-like mutable sequences
    - MAP      -> "map"      : any Mapping
    - SET      -> "set"      : set and frozenset
    - STRUCT   -> "struct"   : dataclasses, namedtuples, attribute bags
    - POINTER  -> "pointer"  : weak references
    - BOXED    -> "boxed"    : closure cells
    - FUNCTION -> "function" : functions, methods, partials
    - CHANNEL  -> "channel"  : queues and generators
    - VALUE    -> "value"    : objects with their own equality
    - OPAQUE   -> "opaque"   : anything else, compared by identity
    """

    INVALID = auto()
    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    COMPLEX = auto()
    STRING = auto()
    ARRAY = auto()
    SLICE = auto()
    MAP = auto()
    SET = auto()
    STRUCT = auto()
    POINTER = auto()
    BOXED = auto()
    FUNCTION = auto()
    CHANNEL = auto()
    VALUE = auto()
    OPAQUE = auto()


# Kinds that can hold references to other values, and therefore cycles.
COMPOSITE_KINDS = frozenset(
    {
        Kind.ARRAY,
        Kind.SLICE,
        Kind.MAP,
        Kind.SET,
        Kind.STRUCT,
        Kind.POINTER,
        Kind.BOXED,
    }
)

_SLICE_TYPES = (list, bytearray, collections.deque, array.array, memoryview)
_FUNCTION_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.BuiltinMethodType,
    types.MethodWrapperType,
    functools.partial,
)
_CHANNEL_TYPES = (
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    types.GeneratorType,
    types.AsyncGeneratorType,
)


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def kind_of(value: Any) -> Kind:
    """Classify ``value`` into one of the ``Kind`` members.

    The dispatch order is significant: bool MUST be checked before the
    numeric tower (bool subclasses int), namedtuples before tuples, and
    dataclasses before the generic "defines __eq__" test because dataclasses
    generate their own ``__eq__``.
    """
    if value is None:
        return Kind.INVALID
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, numbers.Integral):
        return Kind.INT
    if isinstance(value, numbers.Real):
        return Kind.FLOAT
    if isinstance(value, numbers.Complex):
        return Kind.COMPLEX
    if isinstance(value, (str, bytes)):
        return Kind.STRING
    if _is_namedtuple(value):
        return Kind.STRUCT
    if isinstance(value, tuple):
        return Kind.ARRAY
    if isinstance(value, _SLICE_TYPES):
        return Kind.SLICE
    if isinstance(value, Mapping):
        return Kind.MAP
    if isinstance(value, (set, frozenset)):
        return Kind.SET
    if isinstance(value, weakref.ref):
        return Kind.POINTER
    if isinstance(value, types.CellType):
        return Kind.BOXED
    if isinstance(value, _FUNCTION_TYPES):
        return Kind.FUNCTION
    if isinstance(value, _CHANNEL_TYPES):
        return Kind.CHANNEL
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Kind.STRUCT
    if isinstance(value, (type, enum.Enum)):
        return Kind.VALUE
    if type(value).__eq__ is not object.__eq__:
        return Kind.VALUE
    if isinstance(value, types.ModuleType):
        return Kind.OPAQUE
    if hasattr(value, "__dict__") or getattr(type(value), "__slots__", None):
        return Kind.STRUCT
    return Kind.OPAQUE


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def struct_fields(value: Any) -> dict[str, Any]:
    """Return the ``{name: value}`` fields of a STRUCT-kind value, in order.

    - dataclasses: declared fields (``dataclasses.fields`` order)
    - namedtuples: ``_fields``
    - other objects: ``__slots__`` members that are set, then ``vars()``
    """
    if _is_namedtuple(value):
        return dict(zip(type(value)._fields, value, strict=True))
    if dataclasses.is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}

    fields: dict[str, Any] = {}
    for name in _slot_names(type(value)):
        if hasattr(value, name):
            fields[name] = getattr(value, name)
    if hasattr(value, "__dict__"):
        fields.update(vars(value))
    return fields


def cell_contents(cell: types.CellType) -> tuple[bool, Any]:
    """Return ``(filled, contents)`` for a closure cell; empty cells give (False, None)."""
    try:
        return True, cell.cell_contents
    except ValueError:
        return False, None


def type_name(tp: type | None) -> str:
    """Render a type the way diagnostics show it: builtins unqualified."""
    if tp is None:
        return "None"
    if tp.__module__ == "builtins":
        return tp.__qualname__
    return f"{tp.__module__}.{tp.__qualname__}"
