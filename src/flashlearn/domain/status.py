"""
Card status state machine.

    NEW ──correct──▶ REVIEWING ──correct, interval & streak high──▶ MASTERED
     │                 ▲   │                                           │
     │            correct  lapse                                       │
     │                 │   ▼                                           │
     └────lapse────▶ LEARNING ◀──────────────lapse─────────────────────┘

Every transition is a pure function of the current status and the answer.
"""

from .models import ReviewStatus


def after_answer(status: ReviewStatus, correct: bool) -> ReviewStatus:
    """Status after the correctness branch, before any mastery promotion."""
    if not correct:
        return ReviewStatus.LEARNING

    if status in (ReviewStatus.NEW, ReviewStatus.LEARNING):
        return ReviewStatus.REVIEWING
    return status


def can_promote(previous: ReviewStatus, current: ReviewStatus) -> bool:
    """
    Only cards that were already reviewing before the answer and are still
    reviewing after it may be promoted. A card that graduates from new or
    learning in this review has to wait for the next one.
    """
    return previous is ReviewStatus.REVIEWING and current is ReviewStatus.REVIEWING


def promote(
    previous: ReviewStatus,
    current: ReviewStatus,
    interval: float,
    streak: int,
    mastery_threshold: float,
    mastery_streak_minimum: int,
) -> ReviewStatus:
    if not can_promote(previous, current):
        return current
    if interval > mastery_threshold and streak >= mastery_streak_minimum:
        return ReviewStatus.MASTERED
    return current


def entered_mastery(previous: ReviewStatus, current: ReviewStatus) -> bool:
    """Whether a review moved the card into the mastered status."""
    return current is ReviewStatus.MASTERED and previous is not ReviewStatus.MASTERED
