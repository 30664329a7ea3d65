"""
srs_engine - spaced-repetition scheduling for vocabulary and phrase flashcards.

Quick start:
    from srs_engine import create_card, apply_review, get_study_session

    card = create_card("Bonjour", "Hello", {"type": "text", "id": "lesson-1"})
    card = apply_review(card, "good", time_spent_ms=3000)
    session = get_study_session(pool, max_new=5, max_review=30)
"""

from srs_engine.enums import (
    Algorithm,
    CardStatus,
    ContentSourceType,
    MemoryPhase,
    ReviewResponse,
)
from srs_engine.errors import (
    InvalidResponseError,
    MissingMemoryStateError,
    SchedulingError,
    UnknownAlgorithmError,
)
from srs_engine.models import (
    Card,
    ContentSource,
    DetailedStats,
    MemoryState,
    ReviewForecast,
    ReviewHistoryEntry,
    ReviewSummary,
    SchedulingDelta,
    SchedulingOption,
)
from srs_engine.services import (
    FSRSScheduler,
    SM2Scheduler,
    SpacedRepService,
    apply_review,
    calculate_average_ease_factor,
    calculate_retention_rate,
    create_card,
    estimate_session_duration,
    get_cards_for_review,
    get_detailed_stats,
    get_new_cards,
    get_next_review_text,
    get_scheduling_options,
    get_study_session,
    is_due_for_review,
)

__version__ = "0.1.0"

__all__ = [
    # Enums
    "Algorithm",
    "CardStatus",
    "ContentSourceType",
    "MemoryPhase",
    "ReviewResponse",
    # Errors
    "SchedulingError",
    "InvalidResponseError",
    "UnknownAlgorithmError",
    "MissingMemoryStateError",
    # Models
    "Card",
    "ContentSource",
    "MemoryState",
    "ReviewHistoryEntry",
    "SchedulingDelta",
    "DetailedStats",
    "ReviewForecast",
    "ReviewSummary",
    "SchedulingOption",
    # Operations
    "create_card",
    "apply_review",
    "get_scheduling_options",
    "is_due_for_review",
    "get_cards_for_review",
    "get_new_cards",
    "get_study_session",
    "calculate_retention_rate",
    "calculate_average_ease_factor",
    "estimate_session_duration",
    "get_next_review_text",
    "get_detailed_stats",
    # Schedulers and facade
    "SM2Scheduler",
    "FSRSScheduler",
    "SpacedRepService",
]
