"""Repository file discovery for HTML analysis."""

from htmlintel.ingestion.source_scanner import (
    ScanProfile,
    SourceScanner,
    default_html_profile,
    profile_from_env,
)

__all__ = ["ScanProfile", "SourceScanner", "default_html_profile", "profile_from_env"]
