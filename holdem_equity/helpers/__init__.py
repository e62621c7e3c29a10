# cards
from .cards import Card, Rank, Suit, parse_card, parse_cards, make_deck

# streets + card slots
from .abstraction import Street, card_to_id, id_to_card, street_from_board

# deck
from .deck import Deck, full_deck_minus

# evaluation
from .evaluator import (
    CATEGORY,
    evaluate,
    evaluate7,
    compare_hands,
    winners,
    hand_category,
    tiebreak_ranks,
    describe,
)

__all__ = [
    # cards
    "Card", "Rank", "Suit", "parse_card", "parse_cards", "make_deck",

    # streets
    "Street", "card_to_id", "id_to_card", "street_from_board",

    # deck
    "Deck", "full_deck_minus",

    # evaluation
    "CATEGORY", "evaluate", "evaluate7", "compare_hands", "winners",
    "hand_category", "tiebreak_ranks", "describe",
]
