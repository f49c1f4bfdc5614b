"""Exception types raised by flashlearn."""


class FlashlearnError(Exception):
    """Base class for flashlearn errors."""


class InvalidReviewError(FlashlearnError, ValueError):
    """A review was requested with a quality or card state outside the contract."""


class DeckNotFoundError(FlashlearnError, KeyError):
    def __init__(self, deck_id: str):
        super().__init__(deck_id)
        self.deck_id = deck_id

    def __str__(self) -> str:
        return f"Deck not found: {self.deck_id}"


class CardNotFoundError(FlashlearnError, KeyError):
    def __init__(self, card_id: str):
        super().__init__(card_id)
        self.card_id = card_id

    def __str__(self) -> str:
        return f"Card not found: {self.card_id}"
