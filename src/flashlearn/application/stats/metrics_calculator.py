"""
Progress calculator for deriving user statistics from review outcomes.

This is a pure computation module with no I/O.
"""

import math
from dataclasses import replace
from datetime import datetime, timedelta

from flashlearn.domain import constants
from flashlearn.domain.models import UserStats


def level_for_xp(xp_points: int) -> int:
    """Level = 1 + floor(sqrt(xp / 100))."""
    return 1 + math.floor(math.sqrt(xp_points / constants.XP_PER_LEVEL_UNIT))


class ProgressCalculator:
    """
    Applies review outcomes to UserStats.

    Stateless and side-effect free: every method returns a new UserStats.
    Calendar days are taken from the (UTC) timestamps passed in.
    """

    def record_review(
        self,
        stats: UserStats,
        was_correct: bool,
        became_mastered: bool,
        now: datetime,
    ) -> UserStats:
        """
        Count one review, award the mastery bonus and update the daily streak.

        Args:
            stats: Current statistics.
            was_correct: Whether the review had quality >= 3.
            became_mastered: Whether the card entered the mastered status in this review.
            now: Review time.
        """
        today = now.date().isoformat()
        reviews_by_day = dict(stats.reviews_by_day)
        reviews_by_day[today] = reviews_by_day.get(today, 0) + 1

        mastered_cards = stats.mastered_cards
        xp_points = stats.xp_points
        if became_mastered:
            mastered_cards += 1
            xp_points += constants.XP_MASTERY_BONUS

        updated = replace(
            stats,
            total_reviews=stats.total_reviews + 1,
            correct_reviews=stats.correct_reviews + int(was_correct),
            reviews_by_day=reviews_by_day,
            mastered_cards=mastered_cards,
            xp_points=xp_points,
        )
        return self.update_streak(updated, now)

    def update_streak(self, stats: UserStats, now: datetime) -> UserStats:
        """
        Advance the daily streak.

        - First review ever: streak starts at 1 with a first-day bonus.
        - Already reviewed today: unchanged.
        - Reviewed yesterday: streak grows, with a bigger bonus every 7th day.
        - Otherwise the streak restarts at 1.
        """
        streak_days = stats.streak_days
        xp_points = stats.xp_points
        today = now.date()

        if stats.last_review_date is None:
            streak_days = 1
            xp_points += constants.XP_FIRST_DAY_BONUS
        else:
            last_day = stats.last_review_date.date()
            if last_day == today:
                pass
            elif last_day == today - timedelta(days=1):
                streak_days += 1
                if streak_days % constants.STREAK_WEEK_LENGTH == 0:
                    xp_points += constants.XP_WEEKLY_STREAK_BONUS
                else:
                    xp_points += constants.XP_DAILY_STREAK_BONUS
            else:
                streak_days = 1

        return replace(
            stats,
            streak_days=streak_days,
            last_review_date=now,
            xp_points=xp_points,
            level=level_for_xp(xp_points),
        )

    def add_xp(self, stats: UserStats, points: int) -> UserStats:
        xp_points = stats.xp_points + points
        return replace(stats, xp_points=xp_points, level=level_for_xp(xp_points))
