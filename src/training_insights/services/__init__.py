"""Report services."""

from .performance import PerformanceService

__all__ = ["PerformanceService"]
