import pytest

from holdem_equity.errors import CardParseError, InvalidRequestError
from holdem_equity.helpers.abstraction import (
    Street, board_slots, card_to_id, hero_slots, id_to_card, street_from_board,
)
from holdem_equity.helpers.cards import Card, Rank, Suit, make_deck, parse_card, parse_cards


def test_card_parse_and_str():
    c = Card.from_str("Ah")
    assert c.rank == Rank.ACE
    assert c.suit == Suit.HEARTS
    assert str(c) == "Ah"

def test_card_parse_accepts_ten_and_glyphs():
    assert parse_card("10d") == Card(Rank.TEN, Suit.DIAMONDS)
    assert parse_card("K♠") == Card(Rank.KING, Suit.SPADES)
    assert parse_card(" qc ") == Card(Rank.QUEEN, Suit.CLUBS)

@pytest.mark.parametrize("bad", ["", "A", "1h", "Ax", "AhK", "Zz"])
def test_bad_card_strings_fail_fast(bad):
    with pytest.raises(CardParseError):
        parse_card(bad)

def test_non_string_card_is_rejected():
    with pytest.raises(InvalidRequestError):
        parse_cards([("A", "h")])

def test_card_equality_and_hash():
    assert Card(12, 2) == Card.from_str("Ah")
    assert len({Card.from_str("Ah"), Card.from_str("Ah"), Card.from_str("As")}) == 2

def test_make_deck_has_52_distinct_cards():
    deck = make_deck()
    assert len(deck) == 52
    assert len(set(deck)) == 52

def test_card_id_roundtrip():
    assert card_to_id("2c") == 0
    assert card_to_id("As") == 51
    for cid in range(52):
        assert card_to_id(id_to_card(cid)) == cid
    with pytest.raises(InvalidRequestError):
        id_to_card(52)

def test_street_requirements_and_derivation():
    assert [s.revealed for s in Street] == [0, 3, 4, 5]
    assert street_from_board(0) == Street.PREFLOP
    assert street_from_board(2) == Street.PREFLOP
    assert street_from_board(3) == Street.FLOP
    assert street_from_board(4) == Street.TURN
    assert street_from_board(5) == Street.RIVER

def test_street_parse():
    assert Street.parse("flop") == Street.FLOP
    assert Street.parse(3) == Street.RIVER
    assert Street.parse(Street.TURN) == Street.TURN
    with pytest.raises(InvalidRequestError):
        Street.parse("SHOWDOWN")

def test_hero_slots_pad_missing_cards():
    assert hero_slots(["Ah", None]) == (Card.from_str("Ah"), None)
    assert hero_slots([]) == (None, None)
    with pytest.raises(InvalidRequestError):
        hero_slots(["Ah", "Kd", "Qc"])

def test_board_slots_keep_order_and_reject_gaps():
    assert board_slots(["Kd", "7c", "2h", None, None]) == parse_cards(["Kd", "7c", "2h"])
    assert board_slots(["", None]) == []
    with pytest.raises(InvalidRequestError):
        board_slots(["Kd", None, "2h"])
    with pytest.raises(InvalidRequestError):
        board_slots(["2c", "3c", "4c", "5c", "6c", "7c"])

@pytest.mark.parametrize("rank,suit", [(13, 0), (-1, 0), (0, 4)])
def test_out_of_range_card_values_fail_fast(rank, suit):
    with pytest.raises(CardParseError):
        Card(rank, suit)

def test_slots_must_be_lists():
    with pytest.raises(InvalidRequestError):
        hero_slots(5)
    with pytest.raises(InvalidRequestError):
        board_slots(7)
