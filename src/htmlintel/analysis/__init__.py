"""Cross-document analysis model built from scanned HTML features."""

from htmlintel.analysis.analyzer import (
    Analysis,
    Analyzer,
    DocumentAnalysis,
    analyze_document,
    default_scanners,
    resolve_document,
    scan_document,
)

__all__ = [
    "Analysis",
    "Analyzer",
    "DocumentAnalysis",
    "analyze_document",
    "default_scanners",
    "resolve_document",
    "scan_document",
]
