"""
Card Constructor Contract

The authoring collaborator calls create_card() with the phrase, its
translation and a content source reference; the engine fills in identity,
defaults and the initial scheduling state for the chosen algorithm.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Optional, Union

from srs_engine.config.settings import settings
from srs_engine.enums.learning import Algorithm, CardStatus, MemoryPhase
from srs_engine.models.card import Card, ContentSource, MemoryState
from srs_engine.services.clock import resolve_now

logger = logging.getLogger(__name__)


def initial_memory_state(now: datetime) -> MemoryState:
    """Memory-model state of a card that has never been reviewed."""
    return MemoryState(
        due=now,
        stability=0.0,
        difficulty=0.0,
        elapsed_days=0,
        scheduled_days=0,
        reps=0,
        lapses=0,
        state=MemoryPhase.NEW,
    )


def create_card(
    phrase: str,
    translation: str,
    source: Union[ContentSource, dict[str, Any]],
    *,
    algorithm: Optional[Union[Algorithm, str]] = None,
    language_code: Optional[str] = None,
    level_code: Optional[str] = None,
    tags: Optional[list[str]] = None,
    audio_url: Optional[str] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Card:
    """
    Create a new card, immediately eligible for study.

    Args:
        phrase: Text in the target language
        translation: Translation shown on the answer side
        source: Originating content item (ContentSource or its dict form)
        algorithm: Scheduling algorithm tag (defaults to settings.DEFAULT_ALGORITHM)
        language_code: Target language (defaults to settings.DEFAULT_LANGUAGE_CODE)
        level_code: Proficiency level (defaults to settings.DEFAULT_LEVEL_CODE)
        tags: Free-form tags
        audio_url: Optional pronunciation audio
        notes: Optional learner notes
        now: Creation instant (defaults to current UTC time)

    Returns:
        Card in NEW status with default ease, zero interval and repetitions,
        empty history and next_review_date equal to the creation time

    Raises:
        ValueError: If algorithm is not a known tag
        pydantic.ValidationError: If phrase/translation are empty or the
            source is invalid
    """
    now = resolve_now(now)
    algorithm = Algorithm(algorithm or settings.DEFAULT_ALGORITHM)

    card = Card(
        id=str(uuid.uuid4()),
        created_at=now,
        phrase=phrase,
        translation=translation,
        source=source,
        audio_url=audio_url,
        notes=notes,
        language_code=language_code or settings.DEFAULT_LANGUAGE_CODE,
        level_code=level_code or settings.DEFAULT_LEVEL_CODE,
        tags=list(tags or []),
        algorithm=algorithm,
        status=CardStatus.NEW,
        ease_factor=settings.DEFAULT_EASE_FACTOR,
        interval=0,
        repetitions=0,
        memory=initial_memory_state(now) if algorithm == Algorithm.FSRS else None,
        next_review_date=now,
        review_history=[],
    )

    logger.info(f"Created {algorithm.value} card {card.id} ({card.language_code}/{card.level_code})")

    return card
