"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across the unit tests. Every
test runs against a fixed UTC instant instead of the wall clock.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from srs_engine.enums.learning import Algorithm, CardStatus, MemoryPhase
from srs_engine.models.card import Card, MemoryState, ReviewHistoryEntry
from srs_engine.services.clock import fixed_clock


# ============================================================================
# Time
# ============================================================================


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant for a test."""
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(now):
    """Clock that always returns the fixed reference instant."""
    return fixed_clock(now)


# ============================================================================
# Card Builders
# ============================================================================


@pytest.fixture
def source() -> dict[str, Any]:
    """Content source reference for test cards."""
    return {"type": "text", "id": "test-source", "title": "Test Source"}


@pytest.fixture
def make_card(now, source) -> Callable[..., Card]:
    """
    Factory for heuristic (sm2) cards with overridable fields.

    Defaults describe a NEW card created a month ago and due since then.
    """

    def _make(**overrides: Any) -> Card:
        data: dict[str, Any] = {
            "id": "test-card-1",
            "created_at": now - timedelta(days=30),
            "phrase": "Test phrase",
            "translation": "Test translation",
            "source": source,
            "language_code": "fr",
            "level_code": "A1",
            "tags": [],
            "algorithm": Algorithm.SM2,
            "status": CardStatus.NEW,
            "ease_factor": 2.5,
            "interval": 0,
            "repetitions": 0,
            "next_review_date": now - timedelta(days=30),
            "review_history": [],
        }
        data.update(overrides)
        return Card(**data)

    return _make


@pytest.fixture
def make_fsrs_card(make_card, now) -> Callable[..., Card]:
    """
    Factory for memory-model (fsrs) cards.

    Pass ``memory`` overrides as a dict merged into a fresh NEW state.
    """

    def _make(memory: dict[str, Any] | None = None, **overrides: Any) -> Card:
        memory_data: dict[str, Any] = {
            "due": now - timedelta(days=30),
            "state": MemoryPhase.NEW,
        }
        memory_data.update(memory or {})
        overrides.setdefault("next_review_date", memory_data["due"])
        return make_card(
            algorithm=Algorithm.FSRS,
            memory=MemoryState(**memory_data),
            **overrides,
        )

    return _make


@pytest.fixture
def review_fsrs_card(make_fsrs_card, now) -> Card:
    """FSRS card in the Review phase, last reviewed 10 days ago and due now."""
    return make_fsrs_card(
        memory={
            "due": now,
            "state": MemoryPhase.REVIEW,
            "stability": 10.0,
            "difficulty": 5.0,
            "last_review": now - timedelta(days=10),
            "scheduled_days": 10,
            "reps": 5,
            "lapses": 0,
        },
        status=CardStatus.REVIEW,
        interval=10,
        repetitions=5,
        review_history=[
            ReviewHistoryEntry(
                timestamp=now - timedelta(days=50 - 10 * i),
                response="good",
                time_spent_ms=1000,
            )
            for i in range(5)
        ],
    )
