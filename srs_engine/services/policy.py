"""
Shared scheduling policy helpers.

Small pure functions both scheduler variants apply to their output:
ease clamping, half-up rounding and forward-only status promotion.
"""

import math

from srs_engine.config.settings import settings
from srs_engine.enums.learning import CardStatus, ReviewResponse

# Lifecycle order; only an AGAIN response may move a card backwards.
STATUS_ORDER = {
    CardStatus.NEW: 0,
    CardStatus.LEARNING: 1,
    CardStatus.REVIEW: 2,
    CardStatus.GRADUATED: 3,
}


def clamp_ease(ease_factor: float) -> float:
    """Clamp an ease factor into [MIN_EASE_FACTOR, MAX_EASE_FACTOR]."""
    return max(
        settings.MIN_EASE_FACTOR,
        min(settings.MAX_EASE_FACTOR, ease_factor),
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def status_for_interval(repetitions: int, interval: int) -> CardStatus:
    """Status implied by a successful review's repetitions and interval."""
    if interval >= settings.GRADUATION_INTERVAL_DAYS:
        return CardStatus.GRADUATED
    if repetitions >= settings.REVIEW_MIN_REPETITIONS:
        return CardStatus.REVIEW
    return CardStatus.LEARNING


def next_status(
    current: CardStatus,
    candidate: CardStatus,
    response: ReviewResponse,
) -> CardStatus:
    """
    Resolve the status after a review.

    AGAIN always demotes to LEARNING. Any other response can only keep or
    advance the status, so a review card never slides back to learning
    (or to new) on a HARD answer.
    """
    if response == ReviewResponse.AGAIN:
        return CardStatus.LEARNING
    candidate = max(candidate, CardStatus.LEARNING, key=STATUS_ORDER.__getitem__)
    return max(current, candidate, key=STATUS_ORDER.__getitem__)
