from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Sequence, Tuple, Union

from ..errors import InvalidRequestError
from .cards import Card, CardLike, Rank, Suit, parse_card, parse_optional

# ------------------------------------------------------------
# Card encoding: 0..51 (rank-major, suit-minor)
# rank 2..A => 0..12, suit c/d/h/s => 0..3
# ------------------------------------------------------------


def card_to_id(c: CardLike) -> int:
    c = parse_card(c)
    return int(c.rank) * 4 + int(c.suit)


def id_to_card(cid: int) -> Card:
    if not (0 <= cid < 52):
        raise InvalidRequestError(f"Card id out of range: {cid}")
    return Card(Rank(cid // 4), Suit(cid % 4))


# ------------------------------------------------------------
# Streets
# ------------------------------------------------------------

class Street(IntEnum):
    PREFLOP = 0
    FLOP = 1
    TURN = 2
    RIVER = 3

    @property
    def revealed(self) -> int:
        """Board cards that must be public on this street."""
        return _REVEALED[self]

    @classmethod
    def parse(cls, value: Union["Street", str, int]) -> "Street":
        if isinstance(value, Street):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidRequestError(f"Unknown stage: {value!r}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidRequestError(f"Unknown stage: {value!r}") from None
        raise InvalidRequestError(f"Unknown stage: {value!r}")


_REVEALED = {
    Street.PREFLOP: 0,
    Street.FLOP: 3,
    Street.TURN: 4,
    Street.RIVER: 5,
}


def street_from_board(n_revealed: int) -> Street:
    # 1 or 2 exposed cards cannot form a street yet; they count as preflop
    if n_revealed >= 5:
        return Street.RIVER
    if n_revealed == 4:
        return Street.TURN
    if n_revealed == 3:
        return Street.FLOP
    return Street.PREFLOP


# ------------------------------------------------------------
# Card slots as supplied by a table UI
# ------------------------------------------------------------

def _slot_list(name: str, slots: object) -> list:
    if not isinstance(slots, (list, tuple)):
        raise InvalidRequestError(f"{name} must be a list of card slots, got {slots!r}")
    return list(slots)


def hero_slots(hero: Sequence[Optional[CardLike]]) -> Tuple[Optional[Card], Optional[Card]]:
    hero = _slot_list("hero", hero)
    if len(hero) > 2:
        raise InvalidRequestError(f"Hero has at most 2 card slots, got {len(hero)}")
    padded = [parse_optional(x) for x in hero] + [None] * (2 - len(hero))
    return padded[0], padded[1]


def board_slots(board: Sequence[Optional[CardLike]]) -> List[Card]:
    """
    Returns the revealed board cards in slot order (flop1, flop2, flop3, turn, river).
    Slots must be filled left to right; a gap is rejected.
    """
    board = _slot_list("board", board)
    if len(board) > 5:
        raise InvalidRequestError(f"Board has at most 5 card slots, got {len(board)}")
    cards: List[Card] = []
    seen_gap = False
    for i, x in enumerate(board):
        c = parse_optional(x)
        if c is None:
            seen_gap = True
            continue
        if seen_gap:
            raise InvalidRequestError(f"Board slot {i} is filled after an empty slot")
        cards.append(c)
    return cards


def check_unique(cards: Sequence[Card]) -> None:
    seen = set()
    for c in cards:
        if c in seen:
            raise InvalidRequestError(f"Duplicate card: {c}")
        seen.add(c)
