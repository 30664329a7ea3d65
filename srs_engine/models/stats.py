"""
Statistics Models (Pydantic)

Read-only summaries produced by the statistics module for dashboards.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from srs_engine.enums.learning import ReviewResponse
from srs_engine.models.base import StrictResponse


class ReviewForecast(StrictResponse):
    """Upcoming review counts for non-new cards."""

    overdue: int = 0
    today: int = 0
    tomorrow: int = 0
    this_week: int = 0
    later: int = 0


class SchedulingOption(StrictResponse):
    """
    What would happen if the learner answered with ``response``.

    Lets the review UI show the resulting interval on each answer button.
    """

    response: ReviewResponse
    interval_days: float = Field(..., ge=0)
    next_review_date: datetime
    label: str


class ReviewSummary(StrictResponse):
    """Activity derived from review history."""

    total_reviews: int = 0
    reviewed_today: int = 0
    correct_today: int = 0
    incorrect_today: int = 0
    streak_days: int = 0
    last_review_date: Optional[datetime] = None


class DetailedStats(StrictResponse):
    """
    Pool-wide dashboard summary.

    ``retention_rate`` is the fraction of history entries answered good or
    easy (0.0 when there is no history; check ``summary.total_reviews`` to
    tell "no data" apart). ``estimated_retention`` is the mean predicted
    recall probability of reviewed memory-model cards.
    """

    total_cards: int = 0
    new_cards: int = 0
    learning_cards: int = 0
    review_cards: int = 0
    graduated_cards: int = 0
    relearning_cards: int = 0
    due_today: int = 0

    average_ease_factor: float = 2.5
    average_stability: float = 0.0
    average_difficulty: float = 0.0
    retention_rate: float = Field(0.0, ge=0.0, le=1.0)
    estimated_retention: float = Field(0.0, ge=0.0, le=1.0)
    estimated_minutes_due: int = 0

    forecast: ReviewForecast = Field(default_factory=ReviewForecast)
    summary: ReviewSummary = Field(default_factory=ReviewSummary)
