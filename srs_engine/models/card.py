"""
Card Models (Pydantic)

The Card is the only entity the engine knows. It is a flat, immutable
record: the authoring collaborator creates it, the Review Applicator
replaces it with an updated copy once per graded response, and the
persistence collaborator stores it verbatim.

Data flows:
    create_card() → Card → apply_review() → Card' → storage

Invariants kept by the schedulers (not enforced at validation time, so
that stored records always load):
    - ease_factor >= MIN_EASE_FACTOR
    - interval >= 1 once the card leaves NEW
    - len(review_history) == number of apply_review() calls
    - algorithm never changes after creation
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import AwareDatetime, Field, field_validator

from srs_engine.config.settings import settings
from srs_engine.enums.learning import (
    Algorithm,
    CardStatus,
    ContentSourceType,
    MemoryPhase,
    ReviewResponse,
)
from srs_engine.models.base import StrictRecord


class ContentSource(StrictRecord):
    """
    Reference to the content item a card was authored from.

    Opaque to the engine; owned by the authoring collaborator.
    """

    type: ContentSourceType
    id: str
    title: Optional[str] = None
    timestamp: Optional[float] = Field(
        None, ge=0, description="Offset in seconds for video/audio sources"
    )
    context: Optional[str] = None
    url: Optional[str] = None


class ReviewHistoryEntry(StrictRecord):
    """One graded response, appended by the Review Applicator."""

    timestamp: AwareDatetime
    response: ReviewResponse
    time_spent_ms: int = Field(0, ge=0)


class MemoryState(StrictRecord):
    """
    Memory-model scheduling state for cards tagged ``fsrs``.

    A fresh card has zero stability and difficulty, phase NEW, and is due
    at creation time. ``step`` is the index into the learning or
    relearning step sequence and is only meaningful in those phases.
    """

    due: AwareDatetime
    stability: float = Field(0.0, ge=0.0, description="Memory stability in days")
    difficulty: float = Field(0.0, ge=0.0, description="Difficulty, 1-10 once reviewed")
    elapsed_days: int = Field(0, ge=0)
    scheduled_days: int = Field(0, ge=0)
    reps: int = Field(0, ge=0, description="Total reviews")
    lapses: int = Field(0, ge=0)
    state: MemoryPhase = MemoryPhase.NEW
    last_review: Optional[AwareDatetime] = None
    step: int = Field(0, ge=0)


class Card(StrictRecord):
    """
    A vocabulary/phrase flashcard with its scheduling state.

    Heuristic fields (ease_factor, interval, repetitions) are kept current
    for both algorithms so that dashboards can compare cards uniformly.
    ``next_review_date`` is the single field every due query reads.
    """

    # Identity
    id: str
    created_at: AwareDatetime

    # Content (owned by the authoring collaborator)
    phrase: str = Field(..., min_length=1)
    translation: str = Field(..., min_length=1)
    source: ContentSource
    audio_url: Optional[str] = None
    notes: Optional[str] = None

    # Classification
    language_code: str
    level_code: str
    tags: list[str] = Field(default_factory=list)

    # Scheduling
    algorithm: Algorithm
    status: CardStatus = CardStatus.NEW
    ease_factor: float = Field(default_factory=lambda: settings.DEFAULT_EASE_FACTOR)
    interval: int = Field(0, ge=0, description="Days until next review")
    repetitions: int = Field(0, ge=0, description="Consecutive successful reviews")
    memory: Optional[MemoryState] = None
    next_review_date: AwareDatetime

    # Append-only history
    review_history: list[ReviewHistoryEntry] = Field(default_factory=list)

    @field_validator("phrase", "translation")
    @classmethod
    def require_visible_text(cls, v: str) -> str:
        # Stored verbatim; only all-whitespace text is rejected
        if not v.strip():
            raise ValueError("must contain non-whitespace text")
        return v

    @property
    def is_new(self) -> bool:
        """Check if this card has never been reviewed."""
        return self.status == CardStatus.NEW

    @property
    def last_reviewed_at(self) -> Optional[datetime]:
        """Timestamp of the most recent review, or None."""
        if not self.review_history:
            return None
        return self.review_history[-1].timestamp

    def to_record(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible flat record for storage."""
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Card:
        """
        Load a Card from a stored record.

        Raises:
            pydantic.ValidationError: If the record does not match the schema
        """
        return cls.model_validate(record)


class SchedulingDelta(StrictRecord):
    """
    Scheduling fields produced by a strategy's compute_next().

    The Review Applicator merges these into a copy of the card. ``memory``
    is only set by the memory-model strategy.
    """

    status: CardStatus
    ease_factor: float
    interval: int = Field(..., ge=1)
    repetitions: int = Field(..., ge=0)
    next_review_date: AwareDatetime
    memory: Optional[MemoryState] = None
