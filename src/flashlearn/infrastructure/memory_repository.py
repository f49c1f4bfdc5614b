"""In-memory implementation of the CardRepository port."""

from flashlearn.domain.models import Deck, Flashcard, UserStats
from flashlearn.domain.ports import CardRepository


class InMemoryCardRepository(CardRepository):
    """
    Keeps decks, cards and stats in insertion-ordered dicts.

    Nothing survives the process. Useful for tests, simulations and as the
    reference behaviour for other adapters.
    """

    def __init__(self):
        self._decks: dict[str, Deck] = {}
        self._cards: dict[str, Flashcard] = {}
        self._stats = UserStats()

    async def get_deck(self, deck_id: str) -> Deck | None:
        return self._decks.get(deck_id)

    async def list_decks(self) -> list[Deck]:
        return list(self._decks.values())

    async def save_deck(self, deck: Deck) -> None:
        self._decks[deck.id] = deck

    async def delete_deck(self, deck_id: str) -> None:
        self._decks.pop(deck_id, None)

    async def get_card(self, card_id: str) -> Flashcard | None:
        return self._cards.get(card_id)

    async def list_cards(self, deck_id: str | None = None) -> list[Flashcard]:
        if deck_id is None:
            return list(self._cards.values())
        return [card for card in self._cards.values() if card.deck_id == deck_id]

    async def save_card(self, card: Flashcard) -> None:
        self._cards[card.id] = card

    async def delete_card(self, card_id: str) -> None:
        self._cards.pop(card_id, None)

    async def get_stats(self) -> UserStats:
        return self._stats

    async def save_stats(self, stats: UserStats) -> None:
        self._stats = stats
