"""Report rendering for asset analyses."""

from .renderer import ReportRenderer

__all__ = ["ReportRenderer"]
