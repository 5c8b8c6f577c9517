"""Static analysis of HTML component definitions (Polymer-style ``<dom-module>``)."""

from htmlintel.analysis.analyzer import Analysis, Analyzer, DocumentAnalysis
from htmlintel.html.document import ParsedHtmlDocument
from htmlintel.polymer.dom_module_scanner import DomModule, DomModuleScanner, ScannedDomModule

__all__ = [
    "Analysis",
    "Analyzer",
    "DocumentAnalysis",
    "DomModule",
    "DomModuleScanner",
    "ParsedHtmlDocument",
    "ScannedDomModule",
]
