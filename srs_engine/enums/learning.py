"""
Learning System Enums

Defines enums for the card lifecycle, the graded response vocabulary,
the scheduling algorithm tag and the memory-model internal state.
"""

from __future__ import annotations

from enum import Enum

from srs_engine.errors import InvalidResponseError


class CardStatus(str, Enum):
    """
    Card lifecycle status shared by both scheduling algorithms.

    State transitions:
    - NEW → LEARNING (first review)
    - LEARNING → REVIEW (repetition threshold reached)
    - REVIEW → GRADUATED (interval reaches the long-term threshold)
    - any → LEARNING on an AGAIN response (lapse)
    """

    NEW = "new"  # Never reviewed, immediately due
    LEARNING = "learning"  # Short intervals, or recovering from a lapse
    REVIEW = "review"  # Normal spaced intervals
    GRADUATED = "graduated"  # Long-term intervals


class ReviewResponse(str, Enum):
    """
    Learner's graded response after seeing a card.

    The same four tokens drive both scheduling algorithms.
    """

    AGAIN = "again"  # Failed to recall, lapse
    HARD = "hard"  # Recalled with significant difficulty
    GOOD = "good"  # Recalled with reasonable effort
    EASY = "easy"  # Recalled effortlessly

    @classmethod
    def parse(cls, value: ReviewResponse | str) -> ReviewResponse:
        """
        Coerce a raw token into a ReviewResponse.

        Raises:
            InvalidResponseError: If value is not one of again/hard/good/easy
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidResponseError(
                f"Invalid review response {value!r}; "
                f"expected one of {[r.value for r in cls]}",
                details={"value": repr(value)},
            ) from e

    @property
    def is_retained(self) -> bool:
        """Whether this response counts toward the retention rate."""
        return self in (ReviewResponse.GOOD, ReviewResponse.EASY)


class Algorithm(str, Enum):
    """
    Scheduling algorithm a card is tagged with at creation.
    """

    SM2 = "sm2"  # Heuristic ease-factor scheduler
    FSRS = "fsrs"  # Memory-model (stability/difficulty) scheduler


class MemoryPhase(str, Enum):
    """
    Internal state of the memory-model scheduler, stored on the card.

    Values are capitalized to match the persisted record format.
    """

    NEW = "New"
    LEARNING = "Learning"
    REVIEW = "Review"
    RELEARNING = "Relearning"


class ContentSourceType(str, Enum):
    """
    Kind of content item a card was authored from.
    """

    VIDEO = "video"
    AUDIO = "audio"
    TEXT = "text"
