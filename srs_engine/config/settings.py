"""
Scheduling Policy Configuration

This module provides type-safe configuration loading using Pydantic settings.
Every scheduling policy constant lives here so that the schedulers, the
session composer and the statistics module read one source of truth.

Usage:
    from srs_engine.config import settings

    floor = settings.MIN_EASE_FACTOR
    ratio = settings.SESSION_REVIEWS_PER_NEW_CARD

Environment Variables:
    SRS_DEFAULT_ALGORITHM - Algorithm tag for new cards (default: fsrs)
    SRS_MAX_NEW_CARDS_PER_SESSION - New card cap per session (default: 10)
    SRS_FSRS_DESIRED_RETENTION - Target recall probability (default: 0.9)
    etc.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from srs_engine.enums.learning import Algorithm


class Settings(BaseSettings):
    """Scheduling policy constants loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SRS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unrelated SRS_* variables
    )

    # ===========================================
    # Card Defaults
    # ===========================================
    DEFAULT_ALGORITHM: Algorithm = Algorithm.FSRS
    DEFAULT_LANGUAGE_CODE: str = "fr"
    DEFAULT_LEVEL_CODE: str = "A1"

    # ===========================================
    # Heuristic Scheduler (SM-2 variant)
    # ===========================================
    DEFAULT_EASE_FACTOR: float = 2.5
    MIN_EASE_FACTOR: float = 1.3
    MAX_EASE_FACTOR: float = 3.0

    # SM-2 quality (0-5) per response, feeding the standard ease update
    RESPONSE_QUALITY: dict[str, int] = {
        "again": 0,
        "hard": 2,
        "good": 4,
        "easy": 5,
    }

    # Extra ease delta added on top of the SM-2 update
    EASE_MODIFIERS: dict[str, float] = {
        "again": -0.2,
        "hard": -0.15,
        "good": 0.0,
        "easy": 0.15,
    }

    # Fixed first intervals (days) for a card that has never been reviewed.
    # "again" is governed by the lapse rule and always yields 1 day.
    NEW_CARD_INTERVALS: dict[str, int] = {
        "hard": 1,
        "good": 3,
        "easy": 7,
    }

    LAPSE_INTERVAL_DAYS: int = 1
    REVIEW_MIN_REPETITIONS: int = 2  # learning -> review
    GRADUATION_INTERVAL_DAYS: int = 21  # review -> graduated

    # ===========================================
    # Memory-Model Scheduler (FSRS variant)
    # ===========================================
    FSRS_DESIRED_RETENTION: float = 0.9
    FSRS_MAX_INTERVAL_DAYS: int = 365
    FSRS_ENABLE_FUZZING: bool = False

    # Display ease for memory-model cards: base + (10 - difficulty) * scale
    DERIVED_EASE_BASE: float = 2.5
    DERIVED_EASE_SCALE: float = 0.1

    # ===========================================
    # Sessions
    # ===========================================
    MAX_NEW_CARDS_PER_SESSION: int = 10
    MAX_REVIEWS_PER_SESSION: int = 50
    SESSION_REVIEWS_PER_NEW_CARD: int = 3
    SECONDS_PER_CARD: int = 10


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
