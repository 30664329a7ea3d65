"""
Session Composer

Builds a bounded, interleaved study queue from a card pool. Review cards
dominate; new material trickles in at a fixed ratio (one new card after
every SESSION_REVIEWS_PER_NEW_CARD review cards). When either pool runs
out, the rest of the other is appended in its existing order.

Both caps are hard ceilings. A cap of zero yields no cards of that kind,
and NEW cards only enter through the new-card pool.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from srs_engine.config.settings import settings
from srs_engine.enums.learning import CardStatus
from srs_engine.models.card import Card
from srs_engine.services.clock import resolve_now
from srs_engine.services.due import get_cards_for_review, get_new_cards

logger = logging.getLogger(__name__)


def interleave(
    review_cards: list[Card],
    new_cards: list[Card],
    reviews_per_new: Optional[int] = None,
) -> list[Card]:
    """
    Merge two already-ordered pools without re-sorting either.

    Pattern: ``reviews_per_new`` review cards, then one new card, repeated
    until one pool is exhausted; the remainder is appended as-is. A ratio
    of 0 puts every new card ahead of the reviews.
    """
    if reviews_per_new is None:
        reviews_per_new = settings.SESSION_REVIEWS_PER_NEW_CARD
    step = max(0, reviews_per_new)

    session: list[Card] = []
    review_idx = 0
    new_idx = 0

    while review_idx < len(review_cards) and new_idx < len(new_cards):
        chunk = review_cards[review_idx : review_idx + step]
        session.extend(chunk)
        review_idx += len(chunk)

        session.append(new_cards[new_idx])
        new_idx += 1

    session.extend(review_cards[review_idx:])
    session.extend(new_cards[new_idx:])
    return session


def get_study_session(
    cards: Iterable[Card],
    max_new: Optional[int] = None,
    max_review: Optional[int] = None,
    now: Optional[datetime] = None,
) -> list[Card]:
    """
    Compose the next study session.

    Args:
        cards: Card pool
        max_new: Cap on NEW cards (defaults to settings.MAX_NEW_CARDS_PER_SESSION)
        max_review: Cap on due review cards (defaults to settings.MAX_REVIEWS_PER_SESSION)
        now: Reference time, read once for the whole session

    Returns:
        Ordered session: due cards most overdue first, new cards oldest
        first, interleaved
    """
    cards = list(cards)
    now = resolve_now(now)

    if max_new is None:
        max_new = settings.MAX_NEW_CARDS_PER_SESSION
    if max_review is None:
        max_review = settings.MAX_REVIEWS_PER_SESSION

    new_cards = get_new_cards(cards, max(0, max_new))
    review_cards = get_cards_for_review(
        [card for card in cards if card.status != CardStatus.NEW],
        max(0, max_review),
        now,
    )

    session = interleave(review_cards, new_cards)

    logger.info(
        f"Composed session of {len(session)} cards "
        f"({len(review_cards)} review, {len(new_cards)} new) from pool of {len(cards)}"
    )

    return session
