"""
Statistics Module

Derived, read-only numbers for dashboards: retention rate, average ease,
session duration estimates, human-readable next-review text, an upcoming
review forecast, today's activity and the aggregate DetailedStats.

Retention rate is a fraction in [0, 1]: the share of all review-history
entries answered good or easy. A pool with no history reports 0.0; use
ReviewSummary.total_reviews to tell "no data" from "nothing retained".
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

from srs_engine.config.settings import settings
from srs_engine.enums.learning import Algorithm, CardStatus, MemoryPhase
from srs_engine.models.card import Card
from srs_engine.models.stats import DetailedStats, ReviewForecast, ReviewSummary
from srs_engine.services.clock import resolve_now, to_utc
from srs_engine.services.due import is_due_for_review
from srs_engine.services.fsrs import (
    FSRSScheduler,
    effective_ease_factor,
    estimate_retrievability,
)


def calculate_retention_rate(cards: Iterable[Card]) -> float:
    """
    Fraction of all review-history entries answered good or easy.

    Returns:
        Value in [0, 1]; 0.0 when no card has any history
    """
    total = 0
    retained = 0
    for card in cards:
        for entry in card.review_history:
            total += 1
            if entry.response.is_retained:
                retained += 1

    return retained / total if total else 0.0


def calculate_average_ease_factor(cards: Iterable[Card]) -> float:
    """
    Mean ease factor across the pool.

    Reviewed memory-model cards contribute their derived ease factor.
    An empty pool returns DEFAULT_EASE_FACTOR.
    """
    eases = [effective_ease_factor(card) for card in cards]
    if not eases:
        return settings.DEFAULT_EASE_FACTOR
    return sum(eases) / len(eases)


def estimate_session_duration(card_count: int) -> int:
    """Estimated minutes to get through ``card_count`` cards, rounded up."""
    seconds = max(0, card_count) * settings.SECONDS_PER_CARD
    return math.ceil(seconds / 60)


def _plural(count: int, unit: str) -> str:
    return f"In {count} {unit}" + ("" if count == 1 else "s")


def get_next_review_text(card: Card, now: Optional[datetime] = None) -> str:
    """
    Human-readable time until the card's next review.

    Uses the whole-day difference (rounded up) between next_review_date
    and now: "Today", "Tomorrow", "In N days" under a week, "In N weeks"
    under 30 days, "In N months" beyond.
    """
    now = resolve_now(now)
    diff_days = math.ceil((to_utc(card.next_review_date) - now).total_seconds() / 86400)

    if diff_days <= 0:
        return "Today"
    if diff_days == 1:
        return "Tomorrow"
    if diff_days < 7:
        return _plural(diff_days, "day")
    if diff_days < 30:
        return _plural(math.ceil(diff_days / 7), "week")
    return _plural(math.ceil(diff_days / 30), "month")


def get_review_forecast(
    cards: Iterable[Card],
    now: Optional[datetime] = None,
) -> ReviewForecast:
    """
    Get forecast of upcoming reviews.

    Args:
        cards: Card pool (NEW cards are skipped)
        now: Reference time (default: now)

    Returns:
        Counts: overdue, today, tomorrow, this_week, later
    """
    now = resolve_now(now)
    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    tomorrow_start = today_start + timedelta(days=1)
    week_end = today_start + timedelta(days=7)

    forecast = {
        "overdue": 0,
        "today": 0,
        "tomorrow": 0,
        "this_week": 0,
        "later": 0,
    }

    for card in cards:
        if card.status == CardStatus.NEW:
            continue

        due = to_utc(card.next_review_date)
        if due < today_start:
            forecast["overdue"] += 1
        elif due < tomorrow_start:
            forecast["today"] += 1
        elif due < tomorrow_start + timedelta(days=1):
            forecast["tomorrow"] += 1
        elif due < week_end:
            forecast["this_week"] += 1
        else:
            forecast["later"] += 1

    return ReviewForecast(**forecast)


def get_review_summary(
    cards: Iterable[Card],
    now: Optional[datetime] = None,
) -> ReviewSummary:
    """
    Summarize review activity from history.

    Days are UTC calendar days. The streak counts consecutive days with at
    least one review, ending today, or yesterday if nothing was reviewed
    yet today.
    """
    now = resolve_now(now)
    today = now.date()

    total = 0
    reviewed_today = 0
    correct_today = 0
    review_days: set = set()
    last_review: Optional[datetime] = None

    for card in cards:
        for entry in card.review_history:
            timestamp = to_utc(entry.timestamp)
            total += 1
            review_days.add(timestamp.date())
            if last_review is None or timestamp > last_review:
                last_review = timestamp
            if timestamp.date() == today:
                reviewed_today += 1
                if entry.response.is_retained:
                    correct_today += 1

    streak = 0
    day = today if today in review_days else today - timedelta(days=1)
    while day in review_days:
        streak += 1
        day -= timedelta(days=1)

    return ReviewSummary(
        total_reviews=total,
        reviewed_today=reviewed_today,
        correct_today=correct_today,
        incorrect_today=reviewed_today - correct_today,
        streak_days=streak,
        last_review_date=last_review,
    )


def get_detailed_stats(
    cards: Iterable[Card],
    now: Optional[datetime] = None,
    scheduler: Optional[FSRSScheduler] = None,
) -> DetailedStats:
    """
    Aggregate dashboard summary for a card pool.

    Args:
        cards: Card pool
        now: Reference time, read once for every figure
        scheduler: FSRS scheduler for retrievability (default from settings)

    Returns:
        DetailedStats with status counts, due count, averages over reviewed
        memory-model cards, retention, forecast and activity summary
    """
    cards = list(cards)
    now = resolve_now(now)

    status_counts = {status: 0 for status in CardStatus}
    relearning = 0
    due_today = 0
    stabilities: list[float] = []
    difficulties: list[float] = []
    retrievabilities: list[float] = []

    for card in cards:
        status_counts[card.status] += 1
        if is_due_for_review(card, now):
            due_today += 1

        memory = card.memory
        if card.algorithm != Algorithm.FSRS or memory is None or memory.state == MemoryPhase.NEW:
            continue
        if memory.state == MemoryPhase.RELEARNING:
            relearning += 1
        stabilities.append(memory.stability)
        difficulties.append(memory.difficulty)
        retrievabilities.append(estimate_retrievability(card, now, scheduler))

    def _mean(values: list[float]) -> float:
        return sum(values) / len(values) if values else 0.0

    return DetailedStats(
        total_cards=len(cards),
        new_cards=status_counts[CardStatus.NEW],
        learning_cards=status_counts[CardStatus.LEARNING],
        review_cards=status_counts[CardStatus.REVIEW],
        graduated_cards=status_counts[CardStatus.GRADUATED],
        relearning_cards=relearning,
        due_today=due_today,
        average_ease_factor=calculate_average_ease_factor(cards),
        average_stability=_mean(stabilities),
        average_difficulty=_mean(difficulties),
        retention_rate=calculate_retention_rate(cards),
        estimated_retention=_mean(retrievabilities),
        estimated_minutes_due=estimate_session_duration(due_today),
        forecast=get_review_forecast(cards, now),
        summary=get_review_summary(cards, now),
    )
