"""
SM-2 review scheduler.

Computes a card's next interval, ease factor, status, streak and due date
from its current state and a 0-5 quality rating.

This is a pure computation module with no I/O.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from flashlearn.domain import constants
from flashlearn.domain.errors import InvalidReviewError
from flashlearn.domain.models import CardReviewState, ReviewStatus
from flashlearn.domain.status import after_answer, promote

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulerSettings:
    """
    Tunable scheduling constants, in fractional days.

    Attributes:
        relearn_interval: Interval assigned after a lapse.
        graduation_interval: Interval assigned when a new or learning card
            is first answered correctly.
        first_reviewing_interval: Interval a freshly graduated reviewing card
            jumps to instead of growing by the ease factor.
        mastery_threshold: Interval that must be exceeded to become mastered.
        mastery_streak_minimum: Streak required to become mastered.
        min_ease_factor: Floor for the ease factor.
    """

    relearn_interval: float = constants.RELEARN_INTERVAL
    graduation_interval: float = constants.GRADUATION_INTERVAL
    first_reviewing_interval: float = constants.FIRST_REVIEWING_INTERVAL
    mastery_threshold: float = constants.MASTERY_THRESHOLD
    mastery_streak_minimum: int = constants.MASTERY_STREAK_MINIMUM
    min_ease_factor: float = constants.MIN_EASE_FACTOR

    @property
    def bootstrap_intervals(self) -> tuple[float, float]:
        return (self.graduation_interval, self.relearn_interval)


DEFAULT_SETTINGS = SchedulerSettings()


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for non-negative values (Python's round() is banker's)."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def is_correct(quality: int) -> bool:
    return quality >= constants.CORRECT_THRESHOLD


def next_ease_factor(
    ease_factor: float, quality: int, floor: float = constants.MIN_EASE_FACTOR
) -> float:
    """
    SM-2 ease update: EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)).

    q=5 adds 0.1, q=4 leaves EF unchanged, q=3 subtracts 0.14 and lower
    ratings drop it faster. Never returns less than `floor`.
    """
    miss = constants.MAX_QUALITY - quality
    return max(floor, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def due_offset(interval: float) -> timedelta:
    """
    Convert a fractional-day interval to whole minutes.

    Intervals shorter than half a minute round down to zero.
    """
    minutes = int(round_half_up(interval * constants.MINUTES_PER_DAY))
    return timedelta(minutes=minutes)


def validate_review(state: CardReviewState, quality: int, now: datetime) -> None:
    """Fail fast on inputs outside the scheduler's contract."""
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidReviewError(f"quality must be an integer, got {quality!r}")
    if not constants.MIN_QUALITY <= quality <= constants.MAX_QUALITY:
        raise InvalidReviewError(
            f"quality must be between {constants.MIN_QUALITY} and "
            f"{constants.MAX_QUALITY}, got {quality}"
        )
    if state.interval < 0:
        raise InvalidReviewError(f"interval must be non-negative, got {state.interval}")
    if state.streak < 0:
        raise InvalidReviewError(f"streak must be non-negative, got {state.streak}")
    if now.tzinfo is None:
        raise InvalidReviewError("now must be timezone-aware")


def _next_interval(
    state: CardReviewState, ease_factor: float, correct: bool, settings: SchedulerSettings
) -> float:
    if not correct:
        return settings.relearn_interval

    if state.status in (ReviewStatus.NEW, ReviewStatus.LEARNING):
        return settings.graduation_interval

    if state.status is ReviewStatus.REVIEWING:
        # Just graduated: multiplying a few minutes by the ease barely moves it
        if state.interval in settings.bootstrap_intervals:
            return settings.first_reviewing_interval
        return round_half_up(state.interval * ease_factor, 2)

    # Mastered cards keep their interval on a correct answer
    return state.interval


def compute_next_review(
    state: CardReviewState,
    quality: int,
    now: datetime | None = None,
    settings: SchedulerSettings | None = None,
) -> CardReviewState:
    """
    Schedule the next review of a card.

    Args:
        state: Current scheduling state of the card.
        quality: Recall quality, 0-5. Below 3 is a lapse.
        now: Review time; defaults to the current UTC time.
        settings: Scheduling constants; defaults to SchedulerSettings().

    Returns:
        A new CardReviewState. The input is not modified.

    Raises:
        InvalidReviewError: If quality or state violate the contract.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    settings = settings or DEFAULT_SETTINGS
    validate_review(state, quality, now)

    correct = is_correct(quality)
    ease_factor = next_ease_factor(state.ease_factor, quality, settings.min_ease_factor)
    streak = state.streak + 1 if correct else 0

    interval = _next_interval(state, ease_factor, correct, settings)
    status = after_answer(state.status, correct)
    status = promote(
        state.status,
        status,
        interval,
        streak,
        settings.mastery_threshold,
        settings.mastery_streak_minimum,
    )

    due_date = now + due_offset(interval)

    logger.debug(
        f"q={quality} {state.status.value}->{status.value} "
        f"interval {state.interval}->{interval} ease {ease_factor:.2f} streak {streak}"
    )

    return CardReviewState(
        ease_factor=ease_factor,
        interval=interval,
        streak=streak,
        status=status,
        last_reviewed=now,
        due_date=due_date,
    )
