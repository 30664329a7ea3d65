"""
Scheduling services.

Usage:
    from srs_engine.services import apply_review, get_study_session

    # Or the facade with an injected clock
    from srs_engine.services import SpacedRepService
"""

from srs_engine.services.card_factory import create_card, initial_memory_state
from srs_engine.services.clock import Clock, fixed_clock, resolve_now, utc_now
from srs_engine.services.due import (
    get_cards_for_review,
    get_new_cards,
    is_due_for_review,
    sort_by_review_priority,
)
from srs_engine.services.fsrs import (
    FSRSScheduler,
    create_scheduler,
    derive_ease_factor,
    estimate_retrievability,
)
from srs_engine.services.review import (
    SchedulerStrategy,
    apply_review,
    default_strategies,
    format_interval,
    get_scheduling_options,
    get_strategy,
)
from srs_engine.services.session import get_study_session, interleave
from srs_engine.services.sm2 import SM2Scheduler
from srs_engine.services.spaced_rep_service import SpacedRepService
from srs_engine.services.stats import (
    calculate_average_ease_factor,
    calculate_retention_rate,
    estimate_session_duration,
    get_detailed_stats,
    get_next_review_text,
    get_review_forecast,
    get_review_summary,
)

__all__ = [
    # Card construction
    "create_card",
    "initial_memory_state",
    # Clock
    "Clock",
    "fixed_clock",
    "resolve_now",
    "utc_now",
    # Schedulers
    "SchedulerStrategy",
    "SM2Scheduler",
    "FSRSScheduler",
    "create_scheduler",
    "default_strategies",
    "get_strategy",
    "derive_ease_factor",
    "estimate_retrievability",
    # Review
    "apply_review",
    "get_scheduling_options",
    "format_interval",
    # Due queries
    "is_due_for_review",
    "get_cards_for_review",
    "get_new_cards",
    "sort_by_review_priority",
    # Sessions
    "get_study_session",
    "interleave",
    # Statistics
    "calculate_retention_rate",
    "calculate_average_ease_factor",
    "estimate_session_duration",
    "get_next_review_text",
    "get_review_forecast",
    "get_review_summary",
    "get_detailed_stats",
    # Facade
    "SpacedRepService",
]
