"""
Heuristic Scheduler (SM-2 variant)

Classic ease-factor scheduling with fixed policy tables:

- AGAIN is a lapse: repetitions reset to 0, interval to 1 day and status
  to LEARNING.
- A NEW card gets a fixed first interval per response (hard 1, good 3,
  easy 7 days), one repetition and the default ease factor.
- Otherwise the interval grows as round(interval × ease_factor), at least
  one day.

Outside the first review the ease factor follows the SM-2 update

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)) + modifier

with quality q = again 0, hard 2, good 4, easy 5, clamped into
[MIN_EASE_FACTOR, MAX_EASE_FACTOR]. Net deltas: again -1.0, hard -0.47,
good 0, easy +0.25.

Status advances learning → review once repetitions reach
REVIEW_MIN_REPETITIONS, and → graduated once the interval reaches
GRADUATION_INTERVAL_DAYS. Only AGAIN moves a card backwards.

Usage:
    from srs_engine.services.sm2 import SM2Scheduler

    delta = SM2Scheduler().compute_next(card, ReviewResponse.GOOD, now)
    print(f"Next review in {delta.interval} days")
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional, Union

from srs_engine.config.settings import settings
from srs_engine.enums.learning import Algorithm, CardStatus, ReviewResponse
from srs_engine.models.card import Card, SchedulingDelta
from srs_engine.services.clock import resolve_now
from srs_engine.services.policy import (
    clamp_ease,
    next_status,
    round_half_up,
    status_for_interval,
)

logger = logging.getLogger(__name__)


def ease_delta(response: ReviewResponse) -> float:
    """SM-2 quality term plus the per-response ease modifier."""
    lost = 5 - settings.RESPONSE_QUALITY[response.value]
    quality_term = 0.1 - lost * (0.08 + lost * 0.02)
    return quality_term + settings.EASE_MODIFIERS[response.value]


class SM2Scheduler:
    """Pure heuristic scheduler for cards tagged ``sm2``."""

    algorithm = Algorithm.SM2

    def compute_next(
        self,
        card: Card,
        response: Union[ReviewResponse, str],
        now: Optional[datetime] = None,
    ) -> SchedulingDelta:
        """
        Compute the scheduling fields after a graded response.

        Args:
            card: Card to schedule (not modified)
            response: Learner's graded response
            now: Review instant (defaults to current UTC time)

        Returns:
            SchedulingDelta with status, ease factor, interval, repetitions
            and next review date

        Raises:
            InvalidResponseError: If response is not again/hard/good/easy
        """
        response = ReviewResponse.parse(response)
        now = resolve_now(now)

        current_ease = clamp_ease(card.ease_factor)
        if card.status == CardStatus.NEW:
            ease_factor = settings.DEFAULT_EASE_FACTOR
        else:
            ease_factor = clamp_ease(current_ease + ease_delta(response))

        if response == ReviewResponse.AGAIN:
            interval = settings.LAPSE_INTERVAL_DAYS
            repetitions = 0
            candidate = CardStatus.LEARNING
        elif card.status == CardStatus.NEW:
            interval = settings.NEW_CARD_INTERVALS[response.value]
            repetitions = 1
            candidate = CardStatus.LEARNING
        else:
            interval = round_half_up(card.interval * current_ease)
            repetitions = card.repetitions + 1
            candidate = status_for_interval(repetitions, max(1, interval))

        interval = max(1, interval)
        status = next_status(card.status, candidate, response)

        logger.debug(
            f"SM-2 {card.id}: {response.value} {card.status.value}->{status.value}, "
            f"interval {card.interval}->{interval}d, "
            f"ease {card.ease_factor:.2f}->{ease_factor:.2f}"
        )

        return SchedulingDelta(
            status=status,
            ease_factor=ease_factor,
            interval=interval,
            repetitions=repetitions,
            next_review_date=now + timedelta(days=interval),
        )
