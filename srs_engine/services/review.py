"""
Review Applicator

The single entry point for recording a graded response. It dispatches to
the scheduler registered for the card's algorithm tag, merges the returned
scheduling fields into a copy of the card, and appends one review-history
entry. The input card is never modified.

Usage:
    from srs_engine.services.review import apply_review

    updated = apply_review(card, "good", time_spent_ms=4200, now=now)
    if updated.status == CardStatus.GRADUATED and card.status != CardStatus.GRADUATED:
        ...  # caller-side reward hook

    # Interval each answer button would produce
    options = get_scheduling_options(card, now=now)
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache
from typing import Mapping, Optional, Protocol, Union

from srs_engine.enums.learning import Algorithm, CardStatus, ReviewResponse
from srs_engine.errors import UnknownAlgorithmError
from srs_engine.models.card import Card, ReviewHistoryEntry, SchedulingDelta
from srs_engine.models.stats import SchedulingOption
from srs_engine.services.clock import resolve_now
from srs_engine.services.fsrs import create_scheduler
from srs_engine.services.sm2 import SM2Scheduler

logger = logging.getLogger(__name__)


class SchedulerStrategy(Protocol):
    """Contract every scheduling algorithm implements."""

    algorithm: Algorithm

    def compute_next(
        self,
        card: Card,
        response: Union[ReviewResponse, str],
        now: Optional[datetime] = None,
    ) -> SchedulingDelta:
        ...


StrategyRegistry = Mapping[Algorithm, SchedulerStrategy]


def default_strategies() -> dict[Algorithm, SchedulerStrategy]:
    """One scheduler per algorithm tag, configured from settings."""
    return {
        Algorithm.SM2: SM2Scheduler(),
        Algorithm.FSRS: create_scheduler(),
    }


@lru_cache()
def _default_registry() -> dict[Algorithm, SchedulerStrategy]:
    return default_strategies()


def _registry(strategies: Optional[StrategyRegistry]) -> StrategyRegistry:
    return strategies if strategies is not None else _default_registry()


def get_strategy(
    algorithm: Union[Algorithm, str],
    strategies: Optional[StrategyRegistry] = None,
) -> SchedulerStrategy:
    """
    Look up the scheduler for an algorithm tag.

    Raises:
        UnknownAlgorithmError: If no scheduler is registered for the tag
    """
    registry = _registry(strategies)
    try:
        return registry[Algorithm(algorithm)]
    except (KeyError, ValueError) as e:
        raise UnknownAlgorithmError(
            f"No scheduler registered for algorithm {algorithm!r}",
            details={"algorithm": str(algorithm)},
        ) from e


def apply_review(
    card: Card,
    response: Union[ReviewResponse, str],
    time_spent_ms: int = 0,
    now: Optional[datetime] = None,
    strategies: Optional[StrategyRegistry] = None,
) -> Card:
    """
    Apply a graded response to a card.

    Args:
        card: Card being reviewed (not modified)
        response: Learner's graded response (again/hard/good/easy)
        time_spent_ms: Time the learner took to answer; negatives clamp to 0
        now: Review instant (defaults to current UTC time)
        strategies: Scheduler per algorithm tag (defaults to settings-built ones)

    Returns:
        New Card with merged scheduling fields and one more history entry;
        identity, content, tags and classification pass through unchanged

    Raises:
        InvalidResponseError: If response is not again/hard/good/easy
        UnknownAlgorithmError: If the card's algorithm has no scheduler
        MissingMemoryStateError: If an fsrs card has no memory state
    """
    response = ReviewResponse.parse(response)
    now = resolve_now(now)

    delta = get_strategy(card.algorithm, strategies).compute_next(card, response, now)

    entry = ReviewHistoryEntry(
        timestamp=now,
        response=response,
        time_spent_ms=max(0, int(time_spent_ms)),
    )

    updates = {
        "status": delta.status,
        "ease_factor": delta.ease_factor,
        "interval": delta.interval,
        "repetitions": delta.repetitions,
        "next_review_date": delta.next_review_date,
        "review_history": [*card.review_history, entry],
    }
    if delta.memory is not None:
        updates["memory"] = delta.memory

    updated = card.model_copy(update=updates, deep=True)

    if updated.status == CardStatus.GRADUATED and card.status != CardStatus.GRADUATED:
        logger.info(f"Card {card.id} graduated after {len(updated.review_history)} reviews")

    return updated


def format_interval(days: float) -> str:
    """
    Short label for an interval, as shown on answer buttons.

    Examples: 0.007 -> "10min", 0.25 -> "6h", 3 -> "3d", 14 -> "2w",
    120 -> "4mo", 400 -> "1y".
    """
    if days < 1:
        minutes = round(days * 24 * 60)
        if minutes < 60:
            return f"{minutes}min"
        return f"{round(minutes / 60)}h"
    if days < 7:
        return f"{round(days)}d"
    if days < 30:
        return f"{round(days / 7)}w"
    if days < 365:
        return f"{round(days / 30)}mo"
    return f"{round(days / 365)}y"


def get_scheduling_options(
    card: Card,
    now: Optional[datetime] = None,
    strategies: Optional[StrategyRegistry] = None,
) -> list[SchedulingOption]:
    """
    Preview the outcome of each possible response.

    Runs the card's own scheduler once per response with the same instant;
    the card is not modified and no history is recorded.

    Returns:
        One SchedulingOption per response, in again/hard/good/easy order
    """
    now = resolve_now(now)
    strategy = get_strategy(card.algorithm, strategies)

    options = []
    for response in ReviewResponse:
        delta = strategy.compute_next(card, response, now)
        interval_days = max(0.0, (delta.next_review_date - now).total_seconds() / 86400)
        options.append(
            SchedulingOption(
                response=response,
                interval_days=interval_days,
                next_review_date=delta.next_review_date,
                label=format_interval(interval_days),
            )
        )
    return options
