"""Capability contracts shared by scanners, scanned records, and resolved features."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from htmlintel.model.source_range import SourceRange
from htmlintel.model.warning import Warning


@runtime_checkable
class Feature(Protocol):
    """Resolved feature indexed by the analysis model."""

    kinds: frozenset[str]
    identifiers: frozenset[str]
    source_range: SourceRange | None
    warnings: Sequence[Warning]


@runtime_checkable
class Resolvable(Protocol):
    """Scanned record that turns into a Feature during model build."""

    warnings: list[Warning]

    def resolve(self) -> Feature:
        """Produce the resolved feature."""
        ...


@dataclass(frozen=True)
class Slot:
    """Named insertion point inside a template; ``name`` is empty when unnamed."""

    name: str
    source_range: SourceRange
