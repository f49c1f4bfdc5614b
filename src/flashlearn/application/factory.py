"""
Store Factory
Centralizes the wiring of a FlashcardStore from configuration.
"""

from collections.abc import Callable
from datetime import datetime

from flashlearn.application.config import AppConfig
from flashlearn.application.store import FlashcardStore
from flashlearn.domain.ports import CardRepository
from flashlearn.infrastructure.memory_repository import InMemoryCardRepository


def create_store(
    config: AppConfig,
    repository: CardRepository | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FlashcardStore:
    """
    Returns a FlashcardStore using the configured scheduling constants.

    Without an explicit repository the store is backed by memory only.
    """
    return FlashcardStore(
        repository or InMemoryCardRepository(),
        settings=config.scheduler_settings(),
        clock=clock,
        review_limit=config.review_limit,
    )
