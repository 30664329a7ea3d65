"""
Unit Tests for Card Creation

Tests the constructor contract used by the authoring collaborator.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from srs_engine.config.settings import settings
from srs_engine.enums.learning import Algorithm, CardStatus, MemoryPhase
from srs_engine.services.card_factory import create_card, initial_memory_state


class TestCreateCard:
    """Tests for create_card()."""

    def test_new_card_is_immediately_due(self, source, now):
        """A fresh card is NEW, unreviewed and due at creation time."""
        card = create_card("Bonjour", "Hello", source, algorithm="sm2", now=now)

        assert card.status == CardStatus.NEW
        assert card.ease_factor == 2.5
        assert card.interval == 0
        assert card.repetitions == 0
        assert card.review_history == []
        assert card.created_at == now
        assert card.next_review_date == now

    def test_sm2_card_has_no_memory_state(self, source, now):
        card = create_card("Bonjour", "Hello", source, algorithm=Algorithm.SM2, now=now)

        assert card.algorithm == Algorithm.SM2
        assert card.memory is None

    def test_fsrs_card_has_fresh_memory_state(self, source, now):
        card = create_card("Bonjour", "Hello", source, algorithm="fsrs", now=now)

        assert card.algorithm == Algorithm.FSRS
        assert card.memory is not None
        assert card.memory.state == MemoryPhase.NEW
        assert card.memory.stability == 0.0
        assert card.memory.difficulty == 0.0
        assert card.memory.reps == 0
        assert card.memory.due == now

    def test_defaults_from_settings(self, source, now):
        """Algorithm, language and level fall back to settings."""
        with patch.object(settings, "DEFAULT_ALGORITHM", Algorithm.SM2):
            card = create_card("Hola", "Hello", source, now=now)

        assert card.algorithm == Algorithm.SM2
        assert card.language_code == settings.DEFAULT_LANGUAGE_CODE
        assert card.level_code == settings.DEFAULT_LEVEL_CODE

    def test_unique_ids(self, source, now):
        first = create_card("un", "one", source, now=now)
        second = create_card("deux", "two", source, now=now)

        assert first.id != second.id

    def test_optional_content_fields(self, source, now):
        card = create_card(
            "Merci",
            "Thank you",
            source,
            language_code="fr",
            level_code="B1",
            tags=["politeness"],
            audio_url="https://example.com/merci.mp3",
            notes="Informal",
            now=now,
        )

        assert card.level_code == "B1"
        assert card.tags == ["politeness"]
        assert card.audio_url == "https://example.com/merci.mp3"
        assert card.notes == "Informal"

    def test_empty_phrase_rejected(self, source, now):
        with pytest.raises(ValidationError):
            create_card("", "Hello", source, now=now)

    def test_content_kept_verbatim(self, source, now):
        """Phrase and translation are not trimmed."""
        card = create_card("  bonjour ", "hello ", source, now=now)

        assert card.phrase == "  bonjour "
        assert card.translation == "hello "

    def test_whitespace_phrase_rejected(self, source, now):
        with pytest.raises(ValidationError):
            create_card("   ", "Hello", source, now=now)

    def test_unknown_algorithm_rejected(self, source, now):
        with pytest.raises(ValueError):
            create_card("Bonjour", "Hello", source, algorithm="leitner", now=now)


class TestInitialMemoryState:
    """Tests for initial_memory_state()."""

    def test_initial_state(self, now):
        memory = initial_memory_state(now)

        assert memory.state == MemoryPhase.NEW
        assert memory.due == now
        assert memory.lapses == 0
        assert memory.last_review is None
