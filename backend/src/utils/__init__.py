"""Utility functions for the ski trip planner."""

from .exceptions import (
    InsightGenerationError,
    NoHistoricalDataError,
    PlannerError,
    UpstreamFetchError,
    ValidationError,
)

__all__ = [
    "InsightGenerationError",
    "NoHistoricalDataError",
    "PlannerError",
    "UpstreamFetchError",
    "ValidationError",
]
