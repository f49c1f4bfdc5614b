"""
Queue builder for review sessions.

Builds ordered review queues by:
1. Filtering a deck's cards down to those that are due
2. Putting new cards first, then the rest by earliest due date
3. Truncating to the session limit
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from flashlearn.domain.constants import DEFAULT_REVIEW_LIMIT
from flashlearn.domain.errors import InvalidReviewError
from flashlearn.domain.models import Flashcard, ReviewStatus

logger = logging.getLogger(__name__)

# Cards that were never scheduled sort as if due since the beginning of time
_NEVER_SCHEDULED = datetime.min.replace(tzinfo=timezone.utc)


def is_due(card: Flashcard, now: datetime) -> bool:
    """New cards and cards without a due date are always due."""
    if card.status is ReviewStatus.NEW:
        return True
    if card.due_date is None:
        return True
    return card.due_date <= now


def _require_aware(now: datetime) -> None:
    if now.tzinfo is None:
        raise InvalidReviewError("now must be timezone-aware")


def _priority(card: Flashcard) -> tuple[bool, datetime]:
    return (card.status is not ReviewStatus.NEW, card.due_date or _NEVER_SCHEDULED)


def select_due(
    cards: Iterable[Flashcard],
    deck_id: str,
    now: datetime | None = None,
    limit: int = DEFAULT_REVIEW_LIMIT,
) -> list[Flashcard]:
    """
    Select the cards of a deck that are due for review, in study order.

    Args:
        cards: Any collection of cards; cards of other decks are ignored.
        deck_id: Deck to build the queue for.
        now: Reference time; defaults to the current UTC time.
        limit: Maximum number of cards to return (default: 20).

    Returns:
        A new list. New cards come first, then by ascending due date.
        Ties keep their input order. The input cards are not modified.

    Raises:
        ValueError: If limit is negative.
        InvalidReviewError: If now is a naive datetime.
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    if now is None:
        now = datetime.now(timezone.utc)
    _require_aware(now)

    due = [card for card in cards if card.deck_id == deck_id and is_due(card, now)]
    # list.sort is stable, so equal keys preserve input order
    due.sort(key=_priority)

    logger.debug(f"Deck {deck_id}: {len(due)} due, returning {min(len(due), limit)}")
    return due[:limit]


def count_due(cards: Iterable[Flashcard], deck_id: str, now: datetime) -> int:
    _require_aware(now)
    return sum(1 for card in cards if card.deck_id == deck_id and is_due(card, now))
