"""Tests for the card status state machine."""

import pytest

from flashlearn.domain.models import ReviewStatus
from flashlearn.domain.status import after_answer, can_promote, entered_mastery, promote

ALL_STATUSES = list(ReviewStatus)


@pytest.mark.parametrize("status", ALL_STATUSES)
def test_lapse_always_goes_to_learning(status):
    assert after_answer(status, correct=False) is ReviewStatus.LEARNING


@pytest.mark.parametrize(
    "status,expected",
    [
        (ReviewStatus.NEW, ReviewStatus.REVIEWING),
        (ReviewStatus.LEARNING, ReviewStatus.REVIEWING),
        (ReviewStatus.REVIEWING, ReviewStatus.REVIEWING),
        (ReviewStatus.MASTERED, ReviewStatus.MASTERED),
    ],
)
def test_correct_answer_transitions(status, expected):
    assert after_answer(status, correct=True) is expected


def test_only_reviewing_cards_can_be_promoted():
    assert can_promote(ReviewStatus.REVIEWING, ReviewStatus.REVIEWING)
    assert not can_promote(ReviewStatus.NEW, ReviewStatus.REVIEWING)
    assert not can_promote(ReviewStatus.LEARNING, ReviewStatus.REVIEWING)
    assert not can_promote(ReviewStatus.REVIEWING, ReviewStatus.LEARNING)
    assert not can_promote(ReviewStatus.MASTERED, ReviewStatus.MASTERED)


class TestPromote:
    def test_promotes_when_interval_and_streak_are_high(self):
        result = promote(ReviewStatus.REVIEWING, ReviewStatus.REVIEWING, 0.2, 2, 0.1, 2)
        assert result is ReviewStatus.MASTERED

    def test_interval_must_exceed_threshold(self):
        result = promote(ReviewStatus.REVIEWING, ReviewStatus.REVIEWING, 0.1, 5, 0.1, 2)
        assert result is ReviewStatus.REVIEWING

    def test_streak_must_reach_minimum(self):
        result = promote(ReviewStatus.REVIEWING, ReviewStatus.REVIEWING, 5.0, 1, 0.1, 2)
        assert result is ReviewStatus.REVIEWING

    def test_graduating_card_is_not_promoted(self):
        result = promote(ReviewStatus.NEW, ReviewStatus.REVIEWING, 5.0, 10, 0.1, 2)
        assert result is ReviewStatus.REVIEWING

    def test_lapsed_card_is_not_promoted(self):
        result = promote(ReviewStatus.REVIEWING, ReviewStatus.LEARNING, 5.0, 10, 0.1, 2)
        assert result is ReviewStatus.LEARNING


def test_entered_mastery_only_on_the_transition():
    assert entered_mastery(ReviewStatus.REVIEWING, ReviewStatus.MASTERED)
    assert not entered_mastery(ReviewStatus.MASTERED, ReviewStatus.MASTERED)
    assert not entered_mastery(ReviewStatus.REVIEWING, ReviewStatus.REVIEWING)
    assert not entered_mastery(ReviewStatus.MASTERED, ReviewStatus.LEARNING)
