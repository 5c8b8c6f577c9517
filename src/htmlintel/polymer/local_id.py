"""Elements inside a component template that carry an explicit id."""

from __future__ import annotations

from dataclasses import dataclass

from htmlintel.model.source_range import SourceRange


@dataclass(frozen=True)
class LocalId:
    """An ``id``-bearing element found in a template body."""

    id: str
    source_range: SourceRange
