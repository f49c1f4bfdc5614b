# Domain Package
from .models import (
    CardReviewState,
    Deck,
    DeckSummary,
    Flashcard,
    ReviewEvent,
    ReviewStatus,
    UserStats,
)
from .ports import CardRepository

__all__ = [
    "ReviewStatus",
    "CardReviewState",
    "ReviewEvent",
    "Flashcard",
    "Deck",
    "DeckSummary",
    "UserStats",
    "CardRepository",
]
