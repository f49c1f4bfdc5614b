import pytest
from pydantic import ValidationError

from flashlearn.application.config import AppConfig, find_config_file, resolve_config
from flashlearn.application.factory import create_store
from flashlearn.application.scheduler import SchedulerSettings


def test_defaults(mock_home):
    config = resolve_config()

    assert config.relearn_interval == 0.0035
    assert config.graduation_interval == 0.007
    assert config.first_reviewing_interval == 0.014
    assert config.mastery_threshold == 0.1
    assert config.mastery_streak_minimum == 2
    assert config.review_limit == 20
    assert config.scheduler_settings() == SchedulerSettings()


def test_env_override(mock_home, monkeypatch):
    monkeypatch.setenv("FLASHLEARN_GRADUATION_INTERVAL", "1")
    monkeypatch.setenv("FLASHLEARN_MASTERY_STREAK_MINIMUM", "3")

    settings = resolve_config().scheduler_settings()

    assert settings.graduation_interval == 1.0
    assert settings.mastery_streak_minimum == 3


def test_toml_file(mock_home):
    cfg = mock_home / ".config/flashlearn/config.toml"
    cfg.parent.mkdir(parents=True)
    cfg.write_text("relearn_interval = 0.5\nfirst_reviewing_interval = 3.0\n")

    assert find_config_file() == cfg
    config = resolve_config()

    assert config.relearn_interval == 0.5
    assert config.first_reviewing_interval == 3.0


def test_precedence(mock_home, monkeypatch):
    (mock_home / ".flashlearn.toml").write_text("mastery_threshold = 5.0\nreview_limit = 7\n")
    monkeypatch.setenv("FLASHLEARN_MASTERY_THRESHOLD", "10")

    config = resolve_config({"review_limit": 3, "relearn_interval": None})

    assert config.mastery_threshold == 10.0  # env beats toml
    assert config.review_limit == 3  # overrides beat toml
    assert config.relearn_interval == 0.0035  # None overrides are ignored


def test_no_config_file(mock_home):
    assert find_config_file() is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"relearn_interval": 0},
        {"mastery_threshold": -1},
        {"mastery_streak_minimum": 0},
        {"review_limit": -5},
    ],
)
def test_invalid_values_rejected(mock_home, overrides):
    with pytest.raises(ValidationError):
        AppConfig(**overrides)


@pytest.mark.asyncio
async def test_create_store_uses_config(mock_home):
    store = create_store(resolve_config({"graduation_interval": 2.0}))

    assert store.settings.graduation_interval == 2.0
    deck = await store.create_deck("D")
    card = await store.create_flashcard(deck.id, "f", "b")
    outcome = await store.review_card(card.id, 5)
    assert outcome.card.state.interval == 2.0


@pytest.mark.asyncio
async def test_create_store_uses_review_limit(mock_home):
    store = create_store(resolve_config({"review_limit": 2}))
    deck = await store.create_deck("D")
    for i in range(3):
        await store.create_flashcard(deck.id, f"f{i}", "b")

    assert len(await store.get_cards_to_review(deck.id)) == 2
    assert len(await store.get_cards_to_review(deck.id, limit=3)) == 3
