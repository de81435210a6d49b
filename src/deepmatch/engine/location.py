"""Location: where an operator was constructed, for diagnostics."""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass

__all__ = ["Location"]

# Frames whose file lives under this directory belong to deepmatch itself.
_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@dataclass(frozen=True, slots=True)
class Location:
    """Source location of an operator construction.

    Attributes:
        name:     Operator name as the user spelled it, e.g. ``"between"``.
        file:     Base name of the file that built the operator.
        line:     Line number in that file.
        function: Name of the enclosing function.
    """

    name: str
    file: str
    line: int
    function: str = ""

    @classmethod
    def capture(cls, name: str) -> Location | None:
        """Return the location of the first caller frame outside deepmatch.

        Returns None when no such frame exists (e.g. when called from the
        package's own module-level code).
        """
        frame = inspect.currentframe()
        try:
            while frame is not None:
                filename = os.path.abspath(frame.f_code.co_filename)
                if not filename.startswith(_PACKAGE_DIR + os.sep):
                    return cls(
                        name=name,
                        file=os.path.basename(filename),
                        line=frame.f_lineno,
                        function=frame.f_code.co_name,
                    )
                frame = frame.f_back
            return None
        finally:
            del frame

    def __str__(self) -> str:
        return f"{self.name} at {self.file}:{self.line}"
