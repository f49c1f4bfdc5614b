from datetime import datetime, timedelta, timezone

import pytest

from flashlearn.application.store import FlashcardStore
from flashlearn.domain.models import CardReviewState, Flashcard, ReviewStatus
from flashlearn.infrastructure.memory_repository import InMemoryCardRepository

NOW = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


def make_card(
    card_id: str,
    deck_id: str = "deck-1",
    status: ReviewStatus = ReviewStatus.REVIEWING,
    due_date: datetime | None = None,
    interval: float = 0.014,
) -> Flashcard:
    """Build a card directly, bypassing the store."""
    return Flashcard(
        id=card_id,
        deck_id=deck_id,
        front=f"front {card_id}",
        back=f"back {card_id}",
        created_at=NOW - timedelta(days=1),
        updated_at=NOW - timedelta(days=1),
        state=CardReviewState(
            interval=0.0 if status is ReviewStatus.NEW else interval,
            status=status,
            due_date=due_date,
        ),
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def card_factory():
    return make_card


@pytest.fixture
def clock():
    """A settable clock: call it for the time, assign clock.now to move it."""

    class Clock:
        def __init__(self):
            self.now = NOW

        def __call__(self):
            return self.now

    return Clock()


@pytest.fixture
def repo():
    return InMemoryCardRepository()


@pytest.fixture
def store(repo, clock):
    return FlashcardStore(repo, clock=clock)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for key in (
        "FLASHLEARN_RELEARN_INTERVAL",
        "FLASHLEARN_GRADUATION_INTERVAL",
        "FLASHLEARN_FIRST_REVIEWING_INTERVAL",
        "FLASHLEARN_MASTERY_THRESHOLD",
        "FLASHLEARN_MASTERY_STREAK_MINIMUM",
        "FLASHLEARN_REVIEW_LIMIT",
    ):
        monkeypatch.delenv(key, raising=False)
    return home
