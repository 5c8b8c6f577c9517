"""Diagnostics attached to scanned and resolved features."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from htmlintel.model.source_range import SourceRange


class Severity(StrEnum):
    """Warning severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Warning:  # noqa: A001 - mirrors the analysis vocabulary
    """
    A single diagnostic produced while building the analysis model.

    Attributes
    ----------
    code : str
        Stable identifier such as ``dom-module-duplicate-id``.
    message : str
        Human-readable description.
    severity : Severity
        How serious the finding is.
    source_range : SourceRange | None
        Location the diagnostic points at, when known.
    """

    code: str
    message: str
    severity: Severity = Severity.WARNING
    source_range: SourceRange | None = None

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to a JSON-friendly dict.

        Returns
        -------
        dict[str, Any]
            Warning payload.
        """
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "source_range": self.source_range.to_dict() if self.source_range else None,
        }
