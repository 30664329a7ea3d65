"""
Memory-Model Scheduler (FSRS variant)

This module wraps the FSRS library behind the same compute_next() contract
as the heuristic scheduler. The numeric model is the library's; this
adapter only translates between the card's stored MemoryState and the
library's Card, and back into the unified card fields.

Key Concepts:
- Stability (S): Days until recall probability decays to the target
- Difficulty (D): Inherent difficulty of the card (1-10 once reviewed)
- Retrievability (R): Current recall probability based on elapsed time

FSRS State Machine (stored as MemoryPhase):
    NEW → LEARNING → REVIEW ↔ RELEARNING

Unified status mapping:
    NEW → new, LEARNING/RELEARNING → learning,
    REVIEW → review, or graduated once scheduled_days reaches
    GRADUATION_INTERVAL_DAYS

Usage:
    from srs_engine.services.fsrs import create_scheduler

    scheduler = create_scheduler(retention=0.9, max_interval=365)
    delta = scheduler.compute_next(card, ReviewResponse.GOOD, now)
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from functools import lru_cache
from typing import Optional, Union

from fsrs import Card as FSRSCard, Rating, Scheduler, State

from srs_engine.config.settings import settings
from srs_engine.enums.learning import (
    Algorithm,
    CardStatus,
    MemoryPhase,
    ReviewResponse,
)
from srs_engine.errors import MissingMemoryStateError
from srs_engine.models.card import Card, MemoryState, SchedulingDelta
from srs_engine.services.clock import resolve_now, to_utc
from srs_engine.services.policy import next_status

logger = logging.getLogger(__name__)

_RATING_MAP = {
    ReviewResponse.AGAIN: Rating.Again,
    ReviewResponse.HARD: Rating.Hard,
    ReviewResponse.GOOD: Rating.Good,
    ReviewResponse.EASY: Rating.Easy,
}

# The library has no "New" state: an unreviewed card is State.Learning
# with no stability, difficulty or last_review.
_PHASE_TO_STATE = {
    MemoryPhase.NEW: State.Learning,
    MemoryPhase.LEARNING: State.Learning,
    MemoryPhase.REVIEW: State.Review,
    MemoryPhase.RELEARNING: State.Relearning,
}

_STATE_TO_PHASE = {
    State.Learning: MemoryPhase.LEARNING,
    State.Review: MemoryPhase.REVIEW,
    State.Relearning: MemoryPhase.RELEARNING,
}


def derive_ease_factor(difficulty: float) -> float:
    """
    Display ease factor for a memory-model card.

    The model has no ease factor; 2.5 + (10 - D) * 0.1 keeps a number
    comparable with heuristic cards. Floored at MIN_EASE_FACTOR.
    """
    derived = settings.DERIVED_EASE_BASE + (10 - difficulty) * settings.DERIVED_EASE_SCALE
    return max(settings.MIN_EASE_FACTOR, derived)


def effective_ease_factor(card: Card) -> float:
    """Ease factor used for statistics, derived for reviewed memory-model cards."""
    if (
        card.algorithm == Algorithm.FSRS
        and card.memory is not None
        and card.memory.state != MemoryPhase.NEW
    ):
        return derive_ease_factor(card.memory.difficulty)
    return card.ease_factor


def phase_to_status(memory: MemoryState) -> CardStatus:
    """Map the memory-model phase onto the unified card lifecycle."""
    if memory.state == MemoryPhase.NEW:
        return CardStatus.NEW
    if memory.state == MemoryPhase.REVIEW:
        if memory.scheduled_days >= settings.GRADUATION_INTERVAL_DAYS:
            return CardStatus.GRADUATED
        return CardStatus.REVIEW
    return CardStatus.LEARNING


def to_fsrs_card(memory: MemoryState) -> FSRSCard:
    """Convert a stored MemoryState into the library's Card."""
    is_new = memory.state == MemoryPhase.NEW or memory.last_review is None
    state = _PHASE_TO_STATE[memory.state] if not is_new else State.Learning

    # Zero stability/difficulty means "not initialised yet"
    stability = memory.stability if memory.stability > 0 and not is_new else None
    difficulty = memory.difficulty if memory.difficulty > 0 and not is_new else None

    return FSRSCard(
        card_id=0,
        state=state,
        step=None if state == State.Review else memory.step,
        stability=stability,
        difficulty=difficulty,
        due=to_utc(memory.due),
        last_review=None if is_new else to_utc(memory.last_review),
    )


class FSRSScheduler:
    """
    FSRS Scheduler adapter.

    Provides the compute_next() strategy contract on top of the FSRS
    library for cards tagged ``fsrs``.

    Attributes:
        desired_retention: Target retention probability (default 0.9 = 90%)
        maximum_interval: Maximum days between reviews (default 365)
        enable_fuzzing: Whether the library randomizes intervals
    """

    algorithm = Algorithm.FSRS

    def __init__(
        self,
        desired_retention: Optional[float] = None,
        maximum_interval: Optional[int] = None,
        enable_fuzzing: Optional[bool] = None,
    ):
        """
        Initialize FSRS scheduler.

        Args:
            desired_retention: Target recall probability (0.7-0.99)
                (defaults to settings.FSRS_DESIRED_RETENTION)
            maximum_interval: Maximum interval in days
                (defaults to settings.FSRS_MAX_INTERVAL_DAYS)
            enable_fuzzing: Randomize intervals
                (defaults to settings.FSRS_ENABLE_FUZZING)
        """
        self.desired_retention = desired_retention or settings.FSRS_DESIRED_RETENTION
        self.maximum_interval = maximum_interval or settings.FSRS_MAX_INTERVAL_DAYS
        self.enable_fuzzing = (
            settings.FSRS_ENABLE_FUZZING if enable_fuzzing is None else enable_fuzzing
        )

        self._fsrs = Scheduler(
            desired_retention=self.desired_retention,
            maximum_interval=self.maximum_interval,
            enable_fuzzing=self.enable_fuzzing,
        )

    def compute_next(
        self,
        card: Card,
        response: Union[ReviewResponse, str],
        now: Optional[datetime] = None,
    ) -> SchedulingDelta:
        """
        Compute the scheduling fields after a graded response.

        Translates the card's memory state into the library's Card, reviews
        it with the mapped rating, and translates the result back.

        Args:
            card: Card to schedule (not modified)
            response: Learner's graded response
            now: Review instant (defaults to current UTC time)

        Returns:
            SchedulingDelta including the updated MemoryState

        Raises:
            InvalidResponseError: If response is not again/hard/good/easy
            MissingMemoryStateError: If the card has no memory state
        """
        response = ReviewResponse.parse(response)
        now = resolve_now(now)
        memory = self._memory_of(card)

        result, _ = self._fsrs.review_card(to_fsrs_card(memory), _RATING_MAP[response], now)

        elapsed_days = 0
        if memory.last_review is not None and memory.state != MemoryPhase.NEW:
            elapsed_days = max(0, (now - to_utc(memory.last_review)).days)

        due = to_utc(result.due)
        new_memory = MemoryState(
            due=due,
            stability=result.stability or 0.0,
            difficulty=result.difficulty or 0.0,
            elapsed_days=elapsed_days,
            scheduled_days=max(0, (due - now).days),
            reps=memory.reps + 1,
            lapses=memory.lapses + (
                1 if response == ReviewResponse.AGAIN and memory.state == MemoryPhase.REVIEW else 0
            ),
            state=_STATE_TO_PHASE[result.state],
            last_review=now,
            step=result.step or 0,
        )

        repetitions = 0 if response == ReviewResponse.AGAIN else card.repetitions + 1
        status = next_status(card.status, phase_to_status(new_memory), response)

        logger.debug(
            f"FSRS {card.id}: {response.value} {memory.state.value}->{new_memory.state.value}, "
            f"S={new_memory.stability:.2f} D={new_memory.difficulty:.2f}, "
            f"due in {new_memory.scheduled_days}d"
        )

        return SchedulingDelta(
            status=status,
            ease_factor=derive_ease_factor(new_memory.difficulty),
            interval=max(1, new_memory.scheduled_days),
            repetitions=repetitions,
            next_review_date=due,
            memory=new_memory,
        )

    def get_retrievability(
        self, memory: MemoryState, now: Optional[datetime] = None
    ) -> float:
        """
        Get current recall probability for a memory state.

        Uses the library's forgetting curve.

        Args:
            memory: Stored memory-model state
            now: Reference time (default: current UTC time)

        Returns:
            Probability of recall (0.0 to 1.0). Unreviewed cards return 1.0.
        """
        if memory.state == MemoryPhase.NEW or memory.last_review is None:
            return 1.0
        if memory.stability <= 0:
            return 0.0

        now = resolve_now(now)
        retrievability = self._fsrs.get_card_retrievability(to_fsrs_card(memory), now)
        return max(0.0, min(1.0, retrievability))

    @staticmethod
    def _memory_of(card: Card) -> MemoryState:
        if card.memory is None:
            raise MissingMemoryStateError(
                f"Card {card.id} is tagged fsrs but has no memory state",
                details={"card_id": card.id},
            )
        return card.memory


def create_scheduler(
    retention: Optional[float] = None,
    max_interval: Optional[int] = None,
) -> FSRSScheduler:
    """
    Create a configured FSRS scheduler.

    Args:
        retention: Target retention probability (default from settings)
        max_interval: Maximum interval in days (default from settings)

    Returns:
        Configured FSRSScheduler instance
    """
    return FSRSScheduler(
        desired_retention=retention,
        maximum_interval=max_interval,
    )


@lru_cache()
def default_scheduler() -> FSRSScheduler:
    """Shared scheduler built from settings, for read-only queries."""
    return create_scheduler()


def estimate_retrievability(
    card: Card,
    now: Optional[datetime] = None,
    scheduler: Optional[FSRSScheduler] = None,
) -> float:
    """
    Estimated recall probability for any card.

    Memory-model cards use the FSRS forgetting curve. Heuristic cards
    approximate stability by their interval: R = exp(-elapsed / interval).
    Cards that have never been reviewed return 1.0.
    """
    now = resolve_now(now)
    if card.algorithm == Algorithm.FSRS and card.memory is not None:
        return (scheduler or default_scheduler()).get_retrievability(card.memory, now)

    last_review = card.last_reviewed_at
    if card.status == CardStatus.NEW or last_review is None:
        return 1.0

    elapsed_days = max(0.0, (now - to_utc(last_review)).total_seconds() / 86400)
    return math.exp(-elapsed_days / max(1, card.interval))
