"""
Due-Query Engine

Pure predicates and filters over a card pool. Every query reads the
algorithm-agnostic ``next_review_date`` field, so heuristic and
memory-model cards are classified the same way.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from srs_engine.enums.learning import CardStatus
from srs_engine.models.card import Card
from srs_engine.services.clock import resolve_now, to_utc
from srs_engine.services.fsrs import FSRSScheduler, estimate_retrievability


def _apply_limit(cards: list[Card], limit: Optional[int]) -> list[Card]:
    # None means "no limit"; zero or negative means "none"
    if limit is None:
        return cards
    return cards[: max(0, limit)]


def is_due_for_review(card: Card, now: Optional[datetime] = None) -> bool:
    """True iff the card's next_review_date is at or before now."""
    return to_utc(card.next_review_date) <= resolve_now(now)


def get_cards_for_review(
    cards: Iterable[Card],
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> list[Card]:
    """
    Get cards due for review, most overdue first.

    Purely date-driven: NEW cards whose date has passed are included.
    Cards with identical dates keep their input order.

    Args:
        cards: Card pool
        limit: Maximum number of cards to return (None for all)
        now: Reference time (default: current UTC time)

    Returns:
        Due cards sorted by ascending next_review_date
    """
    now = resolve_now(now)
    due = [card for card in cards if is_due_for_review(card, now)]
    due.sort(key=lambda card: to_utc(card.next_review_date))
    return _apply_limit(due, limit)


def get_new_cards(
    cards: Iterable[Card],
    limit: Optional[int] = None,
) -> list[Card]:
    """
    Get never-reviewed cards, oldest authored first.

    Args:
        cards: Card pool
        limit: Maximum number of cards to return (None for all)

    Returns:
        NEW cards sorted by ascending created_at
    """
    new_cards = [card for card in cards if card.status == CardStatus.NEW]
    new_cards.sort(key=lambda card: to_utc(card.created_at))
    return _apply_limit(new_cards, limit)


def sort_by_review_priority(
    cards: Iterable[Card],
    now: Optional[datetime] = None,
    scheduler: Optional[FSRSScheduler] = None,
) -> list[Card]:
    """
    Order cards by how urgently they need reviewing.

    Due cards come first, weakest predicted recall first. Cards that are
    not due follow, nearest next_review_date first.
    """
    now = resolve_now(now)
    due: list[tuple[float, int, Card]] = []
    upcoming: list[Card] = []

    for index, card in enumerate(cards):
        if is_due_for_review(card, now):
            due.append((estimate_retrievability(card, now, scheduler), index, card))
        else:
            upcoming.append(card)

    due.sort(key=lambda item: (item[0], item[1]))
    upcoming.sort(key=lambda card: to_utc(card.next_review_date))
    return [card for _, _, card in due] + upcoming
