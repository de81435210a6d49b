"""Field path parsing and canonical rendering.

Grammar::

    path    := [name] segment*
    segment := "." name | "[" key "]" | name        (only right after "]")
    name    := (letter | digit | "_")+
    key     := any character but "]", at least one

A plain ``name`` addresses a struct field; a bracketed ``key`` addresses a
mapping key or a list/tuple index and may contain any character, dots
included.  The ``.`` separating a ``]`` from the following name may be
omitted: ``a[k]b`` and ``a[k].b`` are the same path.

Canonical rendering always writes that ``.``, so ``render(parse(s))``
re-parses to the same steps as ``parse(s)``.
"""

from __future__ import annotations

from dataclasses import dataclass

from deepmatch.errors import PathSyntaxError

__all__ = ["FieldPath", "FieldStep", "parse_path"]


@dataclass(frozen=True, slots=True)
class FieldStep:
    """One step of a field path.

    Attributes:
        name:    Field name, or key/index text for bracketed steps.
        indexed: True when the step was written between brackets.
    """

    name: str
    indexed: bool = False

    def render(self, first: bool = False) -> str:
        if self.indexed:
            return f"[{self.name}]"
        return self.name if first else f".{self.name}"


@dataclass(frozen=True, slots=True)
class FieldPath:
    """Parsed field path: a non-empty tuple of steps plus its source text."""

    steps: tuple[FieldStep, ...]
    text: str = ""

    def render(self, upto: int | None = None) -> str:
        """Canonical text of the path, or of its first ``upto`` steps."""
        steps = self.steps if upto is None else self.steps[:upto]
        return "".join(step.render(first=i == 0) for i, step in enumerate(steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __str__(self) -> str:
        return self.render()

    @classmethod
    def parse(cls, text: str) -> FieldPath:
        return parse_path(text)


def _is_name_char(char: str) -> bool:
    return char == "_" or char.isalnum()


def _check_name(name: str, text: str) -> None:
    if not name:
        msg = f"empty field name in FIELD_PATH {text!r}"
        raise PathSyntaxError(msg)
    for char in name:
        if not _is_name_char(char):
            msg = f"unexpected {char!r} in field name {name!r} in FIELD_PATH {text!r}"
            raise PathSyntaxError(msg)


def parse_path(text: str) -> FieldPath:
    """Parse ``text`` into a ``FieldPath``.

    Raises:
        PathSyntaxError: empty text, unterminated bracket, empty or invalid
            field name.  The message names the offending fragment.

    Example::

        parse_path("a.b[c.d]e").render()   # "a.b[c.d].e"
        parse_path("[3].x").steps          # (FieldStep("3", True), FieldStep("x"))
    """
    if not text:
        msg = "FIELD_PATH cannot be empty"
        raise PathSyntaxError(msg)

    steps: list[FieldStep] = []
    pos, size = 0, len(text)

    while pos < size:
        char = text[pos]

        if char == "[":
            end = text.find("]", pos + 1)
            if end < 0:
                msg = f"cannot find final ']' in FIELD_PATH {text!r}"
                raise PathSyntaxError(msg)
            key = text[pos + 1 : end]
            if not key:
                msg = f"empty field name in FIELD_PATH {text!r}"
                raise PathSyntaxError(msg)
            steps.append(FieldStep(key, indexed=True))
            pos = end + 1
            continue

        if char == ".":
            if not steps:
                msg = f"empty field name in FIELD_PATH {text!r}"
                raise PathSyntaxError(msg)
            pos += 1

        end = pos
        while end < size and text[end] not in ".[":
            end += 1
        name = text[pos:end]
        _check_name(name, text)
        steps.append(FieldStep(name))
        pos = end

    return FieldPath(tuple(steps), text)
