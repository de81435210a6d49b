"""Field paths: ``"users[0].address.city"`` style accessors."""

from __future__ import annotations

from deepmatch.fieldpath.parser import FieldPath, FieldStep, parse_path
from deepmatch.fieldpath.resolver import FieldAccessor, compile_path, resolve

__all__ = [
    "FieldAccessor",
    "FieldPath",
    "FieldStep",
    "compile_path",
    "parse_path",
    "resolve",
]
