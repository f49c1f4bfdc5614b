"""Validated input models for deck and card content."""

from pydantic import BaseModel, Field

from flashlearn.domain.constants import (
    CARD_SIDE_MAX_LEN,
    DECK_DESCRIPTION_MAX_LEN,
    DECK_NAME_MAX_LEN,
    MAX_TAGS,
)


class DeckInput(BaseModel):
    name: str = Field(min_length=1, max_length=DECK_NAME_MAX_LEN)
    description: str = Field(default="", max_length=DECK_DESCRIPTION_MAX_LEN)
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)


class FlashcardInput(BaseModel):
    front: str = Field(min_length=1, max_length=CARD_SIDE_MAX_LEN)
    back: str = Field(min_length=1, max_length=CARD_SIDE_MAX_LEN)
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)
