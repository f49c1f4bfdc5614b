"""
Ports (interfaces) for card and deck storage.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import Deck, Flashcard, UserStats


class CardRepository(ABC):
    """
    Port for storing decks, cards and user statistics.

    Implementations:
        - InMemoryCardRepository: Insertion-ordered dictionaries, no durability.
    """

    @abstractmethod
    async def get_deck(self, deck_id: str) -> Deck | None:
        pass

    @abstractmethod
    async def list_decks(self) -> list[Deck]:
        pass

    @abstractmethod
    async def save_deck(self, deck: Deck) -> None:
        """Insert or replace a deck. Replacing keeps the original position."""
        pass

    @abstractmethod
    async def delete_deck(self, deck_id: str) -> None:
        pass

    @abstractmethod
    async def get_card(self, card_id: str) -> Flashcard | None:
        pass

    @abstractmethod
    async def list_cards(self, deck_id: str | None = None) -> list[Flashcard]:
        """
        Return cards in insertion order.

        Args:
            deck_id: If given, only cards of this deck.
        """
        pass

    @abstractmethod
    async def save_card(self, card: Flashcard) -> None:
        pass

    @abstractmethod
    async def delete_card(self, card_id: str) -> None:
        pass

    @abstractmethod
    async def get_stats(self) -> UserStats:
        pass

    @abstractmethod
    async def save_stats(self, stats: UserStats) -> None:
        pass
