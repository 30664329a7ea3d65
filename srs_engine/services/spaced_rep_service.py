"""
Spaced Repetition Service

Facade that binds one clock and one scheduler registry for the review UI
collaborator. Every public method reads the clock exactly once and passes
that instant to every step underneath it, so one logical operation sees a
single consistent "now".

Usage:
    from srs_engine.services import SpacedRepService

    service = SpacedRepService()

    card = service.create_card("Bonjour", "Hello", {"type": "text", "id": "lesson-1"})
    card = service.review_card(card, "good", time_spent_ms=3500)

    session = service.get_study_session(pool, max_new=5, max_review=30)
    stats = service.get_stats(pool)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

from srs_engine.enums.learning import Algorithm, ReviewResponse
from srs_engine.models.card import Card, ContentSource
from srs_engine.models.stats import DetailedStats, SchedulingOption
from srs_engine.services import card_factory, due, review, session, stats
from srs_engine.services.clock import Clock, utc_now
from srs_engine.services.fsrs import FSRSScheduler
from srs_engine.services.review import StrategyRegistry

logger = logging.getLogger(__name__)


class SpacedRepService:
    """
    Service for scheduling flashcards with SM-2 and FSRS.

    Provides:
    - Card creation
    - Review processing with the card's own algorithm
    - Due/new card queries
    - Session composition
    - Card statistics and next-review text
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        strategies: Optional[StrategyRegistry] = None,
    ):
        """
        Initialize the spaced repetition service.

        Args:
            clock: Source of the current instant (inject a fixed clock in tests)
            strategies: Scheduler per algorithm tag
                (defaults to review.default_strategies())
        """
        self.clock = clock
        self.strategies = dict(strategies) if strategies is not None else review.default_strategies()

    @property
    def fsrs_scheduler(self) -> Optional[FSRSScheduler]:
        """The registered memory-model scheduler, if it is an FSRSScheduler."""
        scheduler = self.strategies.get(Algorithm.FSRS)
        return scheduler if isinstance(scheduler, FSRSScheduler) else None

    def create_card(
        self,
        phrase: str,
        translation: str,
        source: Union[ContentSource, dict[str, Any]],
        **overrides: Any,
    ) -> Card:
        """Create a new card; overrides are passed to card_factory.create_card()."""
        return card_factory.create_card(
            phrase, translation, source, now=self.clock(), **overrides
        )

    def review_card(
        self,
        card: Card,
        response: Union[ReviewResponse, str],
        time_spent_ms: int = 0,
    ) -> Card:
        """
        Process a card review.

        Raises:
            InvalidResponseError: If response is not again/hard/good/easy
        """
        return review.apply_review(
            card,
            response,
            time_spent_ms=time_spent_ms,
            now=self.clock(),
            strategies=self.strategies,
        )

    def preview_card(self, card: Card) -> list[SchedulingOption]:
        """Interval each response would produce, without reviewing."""
        return review.get_scheduling_options(card, now=self.clock(), strategies=self.strategies)

    def is_due(self, card: Card) -> bool:
        """Whether the card is due now."""
        return due.is_due_for_review(card, self.clock())

    def get_due_cards(self, cards: Iterable[Card], limit: Optional[int] = None) -> list[Card]:
        """Due cards, most overdue first."""
        return due.get_cards_for_review(cards, limit, self.clock())

    def get_new_cards(self, cards: Iterable[Card], limit: Optional[int] = None) -> list[Card]:
        """NEW cards, oldest first."""
        return due.get_new_cards(cards, limit)

    def get_priority_queue(self, cards: Iterable[Card]) -> list[Card]:
        """Cards ordered by review urgency (weakest predicted recall first)."""
        return due.sort_by_review_priority(cards, self.clock(), self.fsrs_scheduler)

    def get_study_session(
        self,
        cards: Iterable[Card],
        max_new: Optional[int] = None,
        max_review: Optional[int] = None,
    ) -> list[Card]:
        """Bounded, interleaved study queue."""
        return session.get_study_session(cards, max_new, max_review, self.clock())

    def get_next_review_text(self, card: Card) -> str:
        """Human-readable time until the card's next review."""
        return stats.get_next_review_text(card, self.clock())

    def get_stats(self, cards: Iterable[Card]) -> DetailedStats:
        """Aggregate dashboard summary."""
        return stats.get_detailed_stats(cards, self.clock(), self.fsrs_scheduler)
