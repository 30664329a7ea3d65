"""Pydantic models for cards and statistics."""

from srs_engine.models.card import (
    Card,
    ContentSource,
    MemoryState,
    ReviewHistoryEntry,
    SchedulingDelta,
)
from srs_engine.models.stats import (
    DetailedStats,
    ReviewForecast,
    ReviewSummary,
    SchedulingOption,
)

__all__ = [
    # Card models
    "Card",
    "ContentSource",
    "MemoryState",
    "ReviewHistoryEntry",
    "SchedulingDelta",
    # Statistics models
    "DetailedStats",
    "ReviewForecast",
    "ReviewSummary",
    "SchedulingOption",
]
