"""Scanners for Polymer-style component definitions."""

from htmlintel.polymer.dom_module_scanner import DomModule, DomModuleScanner, ScannedDomModule
from htmlintel.polymer.local_id import LocalId

__all__ = ["DomModule", "DomModuleScanner", "LocalId", "ScannedDomModule"]
