from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Tuple

from ..errors import DeckExhaustedError
from .abstraction import check_unique
from .cards import Card, make_deck


class Deck:
    """
    Unknown cards for one trial.

    draw() picks a uniform index, moves the last card into its place and
    shrinks the list, so every draw is O(1). A Deck is owned by exactly one
    trial; build a fresh one per trial with from_snapshot().
    """

    __slots__ = ("_cards", "_rng")

    def __init__(self, cards: Iterable[Card], rng: Optional[random.Random] = None):
        self._cards: List[Card] = list(cards)
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_snapshot(cls, snapshot: Sequence[Card], rng: random.Random) -> "Deck":
        return cls(snapshot, rng)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __iter__(self):
        return iter(self._cards)

    def snapshot(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    def draw(self) -> Card:
        cards = self._cards
        n = len(cards)
        if n == 0:
            raise DeckExhaustedError("cannot draw from an empty deck")
        i = self._rng.randrange(n)
        c = cards[i]
        cards[i] = cards[n - 1]
        cards.pop()
        return c

    def draw_n(self, n: int) -> List[Card]:
        if n > len(self._cards):
            raise DeckExhaustedError(f"cannot draw {n} cards from a deck of {len(self._cards)}")
        return [self.draw() for _ in range(n)]


def full_deck_minus(known: Sequence[Card], rng: Optional[random.Random] = None) -> Deck:
    check_unique(known)
    return Deck(make_deck(exclude=known), rng)
