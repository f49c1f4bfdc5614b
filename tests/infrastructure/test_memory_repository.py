from dataclasses import replace

import pytest

from flashlearn.domain.models import Deck, UserStats


@pytest.mark.asyncio
async def test_cards_keep_insertion_order(repo, card_factory):
    for card_id in ("c", "a", "b"):
        await repo.save_card(card_factory(card_id))

    assert [c.id for c in await repo.list_cards()] == ["c", "a", "b"]


@pytest.mark.asyncio
async def test_replacing_card_keeps_position(repo, card_factory):
    first = card_factory("a")
    await repo.save_card(first)
    await repo.save_card(card_factory("b"))
    await repo.save_card(replace(first, front="changed"))

    cards = await repo.list_cards()
    assert [c.id for c in cards] == ["a", "b"]
    assert cards[0].front == "changed"


@pytest.mark.asyncio
async def test_list_cards_by_deck(repo, card_factory):
    await repo.save_card(card_factory("a", deck_id="one"))
    await repo.save_card(card_factory("b", deck_id="two"))

    assert [c.id for c in await repo.list_cards("two")] == ["b"]
    assert await repo.list_cards("three") == []


@pytest.mark.asyncio
async def test_missing_lookups_return_none(repo):
    assert await repo.get_card("x") is None
    assert await repo.get_deck("x") is None
    await repo.delete_card("x")
    await repo.delete_deck("x")


@pytest.mark.asyncio
async def test_decks_roundtrip(repo, now):
    deck = Deck(id="d1", name="Deck", created_at=now, updated_at=now)
    await repo.save_deck(deck)

    assert await repo.get_deck("d1") == deck
    await repo.delete_deck("d1")
    assert await repo.list_decks() == []


@pytest.mark.asyncio
async def test_stats_start_empty(repo):
    assert await repo.get_stats() == UserStats()

    await repo.save_stats(UserStats(xp_points=10))
    assert (await repo.get_stats()).xp_points == 10
