"""
Unit Tests for the Heuristic Scheduler (SM-2 variant)

Tests cover:
- Fixed first intervals for new cards
- Lapse handling on AGAIN
- Interval growth and status promotion
- Ease factor bounds
"""

from datetime import timedelta

import pytest

from srs_engine.enums.learning import CardStatus, ReviewResponse
from srs_engine.errors import InvalidResponseError
from srs_engine.services.review import apply_review
from srs_engine.services.sm2 import SM2Scheduler, ease_delta


@pytest.fixture
def scheduler():
    """Heuristic scheduler instance."""
    return SM2Scheduler()


class TestNewCards:
    """Tests for the first review of a NEW card."""

    def test_new_card_hard(self, scheduler, make_card, now):
        """HARD on a new card schedules one day out."""
        delta = scheduler.compute_next(make_card(), ReviewResponse.HARD, now)

        assert delta.interval == 1
        assert delta.repetitions == 1
        assert delta.status == CardStatus.LEARNING
        assert delta.next_review_date == now + timedelta(days=1)

    def test_new_card_good(self, scheduler, make_card, now):
        delta = scheduler.compute_next(make_card(), "good", now)

        assert delta.interval == 3
        assert delta.repetitions == 1
        assert delta.status == CardStatus.LEARNING
        assert delta.ease_factor == 2.5

    def test_new_card_easy(self, scheduler, make_card, now):
        delta = scheduler.compute_next(make_card(), "easy", now)

        assert delta.interval == 7
        assert delta.next_review_date == now + timedelta(days=7)
        assert delta.ease_factor == pytest.approx(2.5)

    def test_new_card_again(self, scheduler, make_card, now):
        """AGAIN on a new card is a lapse."""
        delta = scheduler.compute_next(make_card(), "again", now)

        assert delta.interval == 1
        assert delta.repetitions == 0
        assert delta.status == CardStatus.LEARNING
        assert delta.ease_factor == pytest.approx(2.5)

    @pytest.mark.parametrize("response", ["again", "hard", "good", "easy"])
    def test_new_card_takes_default_ease(self, scheduler, make_card, now, response):
        """The first review sets the default ease whatever was stored."""
        delta = scheduler.compute_next(make_card(ease_factor=1.8), response, now)

        assert delta.ease_factor == pytest.approx(2.5)


class TestEaseUpdate:
    """Tests for the SM-2 ease update on reviewed cards."""

    @pytest.mark.parametrize(
        "response, expected",
        [("again", -1.0), ("hard", -0.47), ("good", 0.0), ("easy", 0.25)],
    )
    def test_ease_delta(self, response, expected):
        """Quality term plus modifier per response."""
        assert ease_delta(ReviewResponse(response)) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "response, expected",
        [("again", 1.5), ("hard", 2.03), ("good", 2.5), ("easy", 2.75)],
    )
    def test_review_card_ease(self, scheduler, make_card, now, response, expected):
        card = make_card(status=CardStatus.REVIEW, interval=6, repetitions=2)

        delta = scheduler.compute_next(card, response, now)

        assert delta.ease_factor == pytest.approx(expected)

    def test_no_memory_state(self, scheduler, make_card, now):
        delta = scheduler.compute_next(make_card(), "good", now)

        assert delta.memory is None


class TestLapses:
    """Tests for AGAIN on a reviewed card."""

    def test_review_card_again(self, scheduler, make_card, now):
        """A review card answered AGAIN resets to learning with a penalty."""
        card = make_card(status=CardStatus.REVIEW, interval=10, repetitions=4)

        delta = scheduler.compute_next(card, "again", now)

        assert delta.interval == 1
        assert delta.repetitions == 0
        assert delta.status == CardStatus.LEARNING
        assert delta.ease_factor < 2.5

    def test_graduated_card_again(self, scheduler, make_card, now):
        card = make_card(status=CardStatus.GRADUATED, interval=40, repetitions=8)

        delta = scheduler.compute_next(card, "again", now)

        assert delta.status == CardStatus.LEARNING
        assert delta.interval == 1


class TestIntervalGrowth:
    """Tests for successful reviews of non-new cards."""

    def test_interval_multiplied_by_ease(self, scheduler, make_card, now):
        """interval × ease_factor, rounded half up."""
        card = make_card(status=CardStatus.LEARNING, interval=3, repetitions=1)

        delta = scheduler.compute_next(card, "good", now)

        # 3 * 2.5 = 7.5 -> 8
        assert delta.interval == 8
        assert delta.repetitions == 2
        assert delta.status == CardStatus.REVIEW

    def test_uses_ease_before_update(self, scheduler, make_card, now):
        """The interval uses the ease factor the card had before the review."""
        card = make_card(status=CardStatus.REVIEW, interval=4, repetitions=2, ease_factor=2.0)

        delta = scheduler.compute_next(card, "easy", now)

        assert delta.interval == 8
        assert delta.ease_factor == pytest.approx(2.25)

    def test_graduation_threshold(self, scheduler, make_card, now):
        """An interval of 21 days or more graduates the card."""
        card = make_card(status=CardStatus.REVIEW, interval=10, repetitions=3)

        delta = scheduler.compute_next(card, "good", now)

        assert delta.interval == 25
        assert delta.status == CardStatus.GRADUATED

    def test_learning_stays_learning_below_threshold(self, scheduler, make_card, now):
        """One repetition is not enough for the review status."""
        card = make_card(status=CardStatus.LEARNING, interval=1, repetitions=0)

        delta = scheduler.compute_next(card, "hard", now)

        assert delta.repetitions == 1
        assert delta.status == CardStatus.LEARNING

    def test_hard_does_not_demote(self, scheduler, make_card, now):
        """Only AGAIN moves a card backwards."""
        card = make_card(status=CardStatus.GRADUATED, interval=1, repetitions=0, ease_factor=1.3)

        delta = scheduler.compute_next(card, "hard", now)

        assert delta.status == CardStatus.GRADUATED

    def test_interval_at_least_one_day(self, scheduler, make_card, now):
        """A zero interval on a non-new card still yields one day."""
        card = make_card(status=CardStatus.LEARNING, interval=0, repetitions=0)

        delta = scheduler.compute_next(card, "good", now)

        assert delta.interval == 1
        assert delta.next_review_date == now + timedelta(days=1)


class TestEaseBounds:
    """Tests for the ease factor floor and ceiling."""

    def test_ease_floor(self, scheduler, make_card, now):
        """Repeated lapses never push the ease factor below 1.3."""
        card = make_card(status=CardStatus.REVIEW, interval=5, repetitions=3, ease_factor=1.35)

        delta = scheduler.compute_next(card, "again", now)

        assert delta.ease_factor == pytest.approx(1.3)

    def test_repeated_lapses_stay_at_floor(self, make_card, now):
        """Ten AGAIN answers in a row keep the ease factor at or above 1.3."""
        card = make_card(status=CardStatus.GRADUATED, interval=30, repetitions=6, ease_factor=3.0)

        for day in range(10):
            card = apply_review(card, "again", now=now + timedelta(days=day))

            assert card.ease_factor >= 1.3
            assert card.interval == 1
            assert card.status == CardStatus.LEARNING

        assert card.ease_factor == pytest.approx(1.3)
        assert len(card.review_history) == 10

    def test_ease_ceiling(self, scheduler, make_card, now):
        card = make_card(status=CardStatus.REVIEW, interval=5, repetitions=3, ease_factor=2.95)

        delta = scheduler.compute_next(card, "easy", now)

        assert delta.ease_factor == pytest.approx(3.0)

    def test_out_of_range_ease_is_clamped_first(self, scheduler, make_card, now):
        """A stored ease below the floor is clamped before use."""
        card = make_card(status=CardStatus.REVIEW, interval=10, repetitions=3, ease_factor=0.5)

        delta = scheduler.compute_next(card, "good", now)

        assert delta.interval == 13
        assert delta.ease_factor == pytest.approx(1.3)


class TestValidation:
    """Tests for input validation."""

    def test_invalid_response(self, scheduler, make_card, now):
        with pytest.raises(InvalidResponseError):
            scheduler.compute_next(make_card(), "perfect", now)

    def test_card_not_modified(self, scheduler, make_card, now):
        card = make_card()
        before = card.model_dump()

        scheduler.compute_next(card, "good", now)

        assert card.model_dump() == before
