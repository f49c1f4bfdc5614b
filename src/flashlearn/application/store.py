"""
Flashcard Store — Application layer orchestrator.

Owns decks, cards and user statistics behind a CardRepository, calls the
scheduler when a review is submitted and the queue builder to build review
sessions.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from ulid import ULID

from flashlearn.domain.constants import DEFAULT_REVIEW_LIMIT
from flashlearn.domain.errors import CardNotFoundError, DeckNotFoundError
from flashlearn.domain.models import (
    Deck,
    DeckSummary,
    Flashcard,
    ReviewEvent,
    ReviewStatus,
    UserStats,
)
from flashlearn.domain.ports import CardRepository
from flashlearn.domain.status import entered_mastery

from .queue_builder import count_due, select_due
from .scheduler import SchedulerSettings, compute_next_review
from .schemas import DeckInput, FlashcardInput
from .stats import ProgressCalculator

logger = logging.getLogger(__name__)


def generate_id() -> str:
    return str(ULID())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ReviewOutcome:
    """Result of submitting one review."""

    card: Flashcard
    event: ReviewEvent
    previous_status: ReviewStatus
    stats: UserStats

    @property
    def became_mastered(self) -> bool:
        return entered_mastery(self.previous_status, self.card.status)


class FlashcardStore:
    """
    Application service for decks, cards, reviews and progress.

    Follows Dependency Inversion: depends on the CardRepository abstraction,
    not a concrete storage adapter. Read-modify-write sequences hold a lock so
    that concurrent reviews never overwrite each other.
    """

    def __init__(
        self,
        repository: CardRepository,
        settings: SchedulerSettings | None = None,
        calculator: ProgressCalculator | None = None,
        clock: Callable[[], datetime] | None = None,
        review_limit: int = DEFAULT_REVIEW_LIMIT,
    ):
        """
        Args:
            repository: The repository (port) holding decks, cards and stats.
            settings: Scheduling constants; uses the defaults if not provided.
            calculator: Optional custom progress calculator.
            clock: Returns the current time; defaults to UTC wall-clock time.
            review_limit: Default size of a review session.
        """
        self._repo = repository
        self._settings = settings or SchedulerSettings()
        self._calc = calculator or ProgressCalculator()
        self._clock = clock or utc_now
        self._review_limit = review_limit
        self._lock = asyncio.Lock()

    @property
    def settings(self) -> SchedulerSettings:
        return self._settings

    # ---------- Decks ----------

    async def create_deck(
        self, name: str, description: str = "", tags: list[str] | None = None
    ) -> Deck:
        data = DeckInput(name=name, description=description, tags=tags or [])
        now = self._clock()
        deck = Deck(
            id=generate_id(),
            name=data.name,
            description=data.description,
            tags=data.tags,
            created_at=now,
            updated_at=now,
        )
        async with self._lock:
            await self._repo.save_deck(deck)
        logger.info(f"Created deck {deck.id} ({deck.name})")
        return deck

    async def get_deck(self, deck_id: str) -> Deck:
        deck = await self._repo.get_deck(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)
        return deck

    async def list_decks(self) -> list[Deck]:
        return await self._repo.list_decks()

    async def update_deck(
        self,
        deck_id: str,
        name: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
    ) -> Deck:
        """Update the given fields of a deck. Fields left as None are kept."""
        async with self._lock:
            deck = await self.get_deck(deck_id)
            data = DeckInput(
                name=deck.name if name is None else name,
                description=deck.description if description is None else description,
                tags=deck.tags if tags is None else tags,
            )
            updated = replace(
                deck,
                name=data.name,
                description=data.description,
                tags=data.tags,
                updated_at=self._clock(),
            )
            await self._repo.save_deck(updated)
        logger.info(f"Updated deck {deck_id}")
        return updated

    async def delete_deck(self, deck_id: str) -> None:
        """Delete a deck together with all of its cards."""
        async with self._lock:
            await self.get_deck(deck_id)
            cards = await self._repo.list_cards(deck_id)
            for card in cards:
                await self._repo.delete_card(card.id)
            await self._repo.delete_deck(deck_id)
        logger.info(f"Deleted deck {deck_id} and {len(cards)} cards")

    async def deck_summary(self, deck_id: str, now: datetime | None = None) -> DeckSummary:
        deck = await self.get_deck(deck_id)
        cards = await self._repo.list_cards(deck_id)
        return DeckSummary(
            deck=deck,
            card_count=len(cards),
            mastered_count=sum(1 for c in cards if c.status is ReviewStatus.MASTERED),
            due_count=count_due(cards, deck_id, now or self._clock()),
        )

    # ---------- Cards ----------

    async def create_flashcard(
        self, deck_id: str, front: str, back: str, tags: list[str] | None = None
    ) -> Flashcard:
        data = FlashcardInput(front=front, back=back, tags=tags or [])
        async with self._lock:
            await self.get_deck(deck_id)
            now = self._clock()
            card = Flashcard(
                id=generate_id(),
                deck_id=deck_id,
                front=data.front,
                back=data.back,
                tags=data.tags,
                created_at=now,
                updated_at=now,
            )
            await self._repo.save_card(card)
        logger.info(f"Created card {card.id} in deck {deck_id}")
        return card

    async def get_flashcard(self, card_id: str) -> Flashcard:
        card = await self._repo.get_card(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    async def list_flashcards(self, deck_id: str | None = None) -> list[Flashcard]:
        return await self._repo.list_cards(deck_id)

    async def update_flashcard(
        self,
        card_id: str,
        front: str | None = None,
        back: str | None = None,
        tags: list[str] | None = None,
    ) -> Flashcard:
        """
        Update card content. Scheduling state only changes through review_card.
        """
        async with self._lock:
            card = await self.get_flashcard(card_id)
            data = FlashcardInput(
                front=card.front if front is None else front,
                back=card.back if back is None else back,
                tags=card.tags if tags is None else tags,
            )
            updated = replace(
                card,
                front=data.front,
                back=data.back,
                tags=data.tags,
                updated_at=self._clock(),
            )
            await self._repo.save_card(updated)
        logger.info(f"Updated card {card_id}")
        return updated

    async def delete_flashcard(self, card_id: str) -> None:
        async with self._lock:
            await self.get_flashcard(card_id)
            await self._repo.delete_card(card_id)
        logger.info(f"Deleted card {card_id}")

    # ---------- Reviews ----------

    async def review_card(
        self, card_id: str, quality: int, now: datetime | None = None
    ) -> ReviewOutcome:
        """
        Submit a review and persist the rescheduled card.

        Args:
            card_id: Card being reviewed.
            quality: Recall quality, 0-5.
            now: Review time; defaults to the store clock.

        Returns:
            ReviewOutcome with the updated card, the recorded event and the
            updated user statistics.

        Raises:
            CardNotFoundError: If the card does not exist.
            InvalidReviewError: If quality is outside 0-5.
        """
        now = now or self._clock()

        async with self._lock:
            card = await self.get_flashcard(card_id)
            state = compute_next_review(card.state, quality, now, self._settings)

            event = ReviewEvent(id=generate_id(), reviewed_at=now, quality=quality)
            updated = replace(
                card,
                state=state,
                review_history=[*card.review_history, event],
            )
            await self._repo.save_card(updated)

            stats = self._calc.record_review(
                await self._repo.get_stats(),
                was_correct=event.was_correct,
                became_mastered=entered_mastery(card.status, state.status),
                now=now,
            )
            await self._repo.save_stats(stats)

        logger.info(
            f"Reviewed card {card_id}: q={quality} {card.status.value}->{state.status.value}, "
            f"due {state.due_date.isoformat()}"
        )
        return ReviewOutcome(
            card=updated, event=event, previous_status=card.status, stats=stats
        )

    async def get_cards_to_review(
        self, deck_id: str, limit: int | None = None, now: datetime | None = None
    ) -> list[Flashcard]:
        cards = await self._repo.list_cards(deck_id)
        if limit is None:
            limit = self._review_limit
        return select_due(cards, deck_id, now or self._clock(), limit)

    # ---------- Stats ----------

    async def get_user_stats(self) -> UserStats:
        return await self._repo.get_stats()

    async def add_xp(self, points: int) -> UserStats:
        async with self._lock:
            stats = self._calc.add_xp(await self._repo.get_stats(), points)
            await self._repo.save_stats(stats)
        return stats
