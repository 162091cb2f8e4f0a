"""Site build orchestration."""

from .pipeline import BuildResult, SiteBuilder

__all__ = ["BuildResult", "SiteBuilder"]
