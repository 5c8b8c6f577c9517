"""Value types and capability contracts for the analysis model."""

from htmlintel.model.comments import get_attached_comment_text
from htmlintel.model.feature import Feature, Resolvable, Slot
from htmlintel.model.source_range import SourcePosition, SourceRange
from htmlintel.model.warning import Severity, Warning

__all__ = [
    "Feature",
    "Resolvable",
    "Severity",
    "Slot",
    "SourcePosition",
    "SourceRange",
    "Warning",
    "get_attached_comment_text",
]
