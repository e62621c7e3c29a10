import random

import pytest

from holdem_equity.errors import DeckExhaustedError, InvalidRequestError
from holdem_equity.helpers.cards import parse_cards
from holdem_equity.helpers.deck import Deck, full_deck_minus


def test_full_deck_minus_integrity():
    known = parse_cards(["Ah", "As", "Kd", "7c", "2h"])
    deck = full_deck_minus(known)
    cards = list(deck)
    assert len(deck) == 52 - len(known)
    assert len(set(cards)) == len(cards)
    assert not any(c in deck for c in known)

def test_full_deck_minus_rejects_duplicates():
    with pytest.raises(InvalidRequestError):
        full_deck_minus(parse_cards(["Ah", "Ah"]))

def test_draw_removes_card():
    deck = full_deck_minus(parse_cards(["Ah", "As"]), rng=random.Random(3))
    c = deck.draw()
    assert len(deck) == 49
    assert c not in deck

def test_draw_everything_then_exhausted():
    deck = Deck(parse_cards(["2c", "3d", "4h"]), random.Random(0))
    drawn = deck.draw_n(3)
    assert sorted(map(str, drawn)) == ["2c", "3d", "4h"]
    with pytest.raises(DeckExhaustedError):
        deck.draw()

def test_draw_n_refuses_overdraw():
    deck = Deck(parse_cards(["2c", "3d"]), random.Random(0))
    with pytest.raises(DeckExhaustedError):
        deck.draw_n(3)
    assert len(deck) == 2

def test_snapshot_copies_are_independent():
    base = full_deck_minus(parse_cards(["Ah", "As"])).snapshot()
    rng = random.Random(5)
    d1 = Deck.from_snapshot(base, rng)
    d2 = Deck.from_snapshot(base, rng)
    d1.draw_n(10)
    assert len(d2) == 50
    assert len(base) == 50

def test_seeded_draws_are_reproducible():
    base = full_deck_minus([]).snapshot()
    a = Deck.from_snapshot(base, random.Random(42)).draw_n(7)
    b = Deck.from_snapshot(base, random.Random(42)).draw_n(7)
    assert a == b
