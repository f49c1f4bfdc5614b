"""
Domain models for flashcards, decks and review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .constants import CORRECT_THRESHOLD, INITIAL_EASE_FACTOR


class ReviewStatus(str, Enum):
    """Lifecycle stage of a card."""

    NEW = "new"
    LEARNING = "learning"
    REVIEWING = "reviewing"
    MASTERED = "mastered"


@dataclass(frozen=True)
class CardReviewState:
    """
    Scheduling state of a single card.

    Attributes:
        ease_factor: Interval growth multiplier (never below 1.3 after a review).
        interval: Days until the next review. Fractions are sub-day intervals.
        streak: Consecutive correct answers since the last lapse.
        status: Lifecycle stage.
        last_reviewed: Time of the last review, if any.
        due_date: When the card is next due. None means due immediately.
    """

    ease_factor: float = INITIAL_EASE_FACTOR
    interval: float = 0.0
    streak: int = 0
    status: ReviewStatus = ReviewStatus.NEW
    last_reviewed: datetime | None = None
    due_date: datetime | None = None


@dataclass(frozen=True)
class ReviewEvent:
    """
    A single entry in a card's review history.

    Attributes:
        id: Unique event identifier.
        reviewed_at: When the review was submitted.
        quality: Self-rated recall quality (0-5).
    """

    id: str
    reviewed_at: datetime
    quality: int

    @property
    def was_correct(self) -> bool:
        return self.quality >= CORRECT_THRESHOLD


@dataclass
class Flashcard:
    """A card with its content, deck membership and scheduling state."""

    id: str
    deck_id: str
    front: str
    back: str
    created_at: datetime
    updated_at: datetime
    tags: list[str] = field(default_factory=list)
    state: CardReviewState = field(default_factory=CardReviewState)

    # Append-only, in submission order
    review_history: list[ReviewEvent] = field(default_factory=list)

    @property
    def status(self) -> ReviewStatus:
        return self.state.status

    @property
    def due_date(self) -> datetime | None:
        return self.state.due_date


@dataclass
class Deck:
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DeckSummary:
    """Counts derived from the cards of one deck."""

    deck: Deck
    card_count: int
    mastered_count: int
    due_count: int


@dataclass(frozen=True)
class UserStats:
    """
    Aggregate learning statistics for the user.

    Attributes:
        streak_days: Consecutive calendar days with at least one review.
        last_review_date: Time of the most recent review.
        total_reviews: All reviews ever submitted.
        correct_reviews: Reviews with quality >= 3.
        mastered_cards: Number of transitions into the mastered status.
        reviews_by_day: ISO date -> number of reviews that day.
        xp_points: Experience points.
        level: Derived from xp_points.
    """

    streak_days: int = 0
    last_review_date: datetime | None = None
    total_reviews: int = 0
    correct_reviews: int = 0
    mastered_cards: int = 0
    reviews_by_day: dict[str, int] = field(default_factory=dict)
    xp_points: int = 0
    level: int = 1

    @property
    def accuracy(self) -> int:
        """Percentage of correct reviews, rounded. 100 before the first review."""
        if self.total_reviews == 0:
            return 100
        return int(self.correct_reviews * 100 / self.total_reviews + 0.5)

    def reviews_on(self, day: date) -> int:
        return self.reviews_by_day.get(day.isoformat(), 0)
