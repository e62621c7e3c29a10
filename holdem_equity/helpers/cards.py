from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Union

from ..errors import CardParseError

RANKS = "23456789TJQKA"
SUITS = "cdhs"
SUIT_GLYPHS = {"♣": "c", "♦": "d", "♥": "h", "♠": "s"}


class Rank(IntEnum):
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12

    @property
    def symbol(self) -> str:
        return RANKS[self]

    @classmethod
    def from_symbol(cls, s: str) -> "Rank":
        s = s.strip().upper()
        if s == "10":
            s = "T"
        if len(s) != 1 or s not in RANKS:
            raise CardParseError(f"Bad rank: {s!r}")
        return cls(RANKS.index(s))


class Suit(IntEnum):
    # integer values are indices only; suits carry no ordering in poker
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    @property
    def symbol(self) -> str:
        return SUITS[self]

    @classmethod
    def from_symbol(cls, s: str) -> "Suit":
        s = SUIT_GLYPHS.get(s.strip(), s.strip().lower())
        if len(s) != 1 or s not in SUITS:
            raise CardParseError(f"Bad suit: {s!r}")
        return cls(SUITS.index(s))


@dataclass(frozen=True, slots=True)
class Card:
    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        # normalise plain ints so equality and hashing stay enum-based
        try:
            if not isinstance(self.rank, Rank):
                object.__setattr__(self, "rank", Rank(self.rank))
            if not isinstance(self.suit, Suit):
                object.__setattr__(self, "suit", Suit(self.suit))
        except ValueError as e:
            raise CardParseError(f"Bad card: {e}") from None

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"

    def __repr__(self) -> str:
        return f"Card({str(self)!r})"

    @staticmethod
    def from_str(s: str) -> "Card":
        s = s.strip()
        if len(s) < 2:
            raise CardParseError(f"Bad card string: {s!r}")
        return Card(Rank.from_symbol(s[:-1]), Suit.from_symbol(s[-1]))


CardLike = Union[str, Card]


def parse_card(x: CardLike) -> Card:
    if isinstance(x, Card):
        return x
    if not isinstance(x, str):
        raise CardParseError(f"Cannot interpret {x!r} as a card")
    return Card.from_str(x)


def parse_optional(x: Optional[CardLike]) -> Optional[Card]:
    """Parse a card slot; empty strings and None mean the slot is unset."""
    if x is None or (isinstance(x, str) and not x.strip()):
        return None
    return parse_card(x)


def parse_cards(cards: Iterable[CardLike]) -> List[Card]:
    return [parse_card(x) for x in cards]


def make_deck(exclude: Iterable[Card] = ()) -> List[Card]:
    dead = set(exclude)
    deck = [Card(r, s) for s in Suit for r in Rank]
    return [c for c in deck if c not in dead]
