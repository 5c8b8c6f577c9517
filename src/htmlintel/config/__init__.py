"""Run configuration."""

from htmlintel.config.models import HtmlIntelConfig

__all__ = ["HtmlIntelConfig"]
