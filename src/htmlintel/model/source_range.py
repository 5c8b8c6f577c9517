"""Zero-based source positions and ranges within analyzed documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, order=True)
class SourcePosition:
    """Zero-based line/column position."""

    line: int
    column: int

    def to_list(self) -> list[int]:
        """
        Serialize as a ``[line, column]`` pair.

        Returns
        -------
        list[int]
            Line and column.
        """
        return [self.line, self.column]


@dataclass(frozen=True)
class SourceRange:
    """Half-open span of text inside a single file."""

    file: str
    start: SourcePosition
    end: SourcePosition

    def contains(self, position: SourcePosition) -> bool:
        """
        Check whether a position falls inside this range.

        Returns
        -------
        bool
            True when ``start <= position < end``.
        """
        return self.start <= position < self.end

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to a JSON-friendly dict.

        Returns
        -------
        dict[str, Any]
            File plus start/end pairs.
        """
        return {"file": self.file, "start": self.start.to_list(), "end": self.end.to_list()}
