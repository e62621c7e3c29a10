from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple

from ..errors import InvalidRequestError
from .abstraction import check_unique
from .cards import Card, CardLike, Rank, parse_cards

CATEGORY = {
    "high_card": 0,
    "pair": 1,
    "two_pair": 2,
    "trips": 3,
    "straight": 4,
    "flush": 5,
    "full_house": 6,
    "quads": 7,
    "straight_flush": 8,
}
CATEGORY_NAME = {v: k for k, v in CATEGORY.items()}

# ------------------------------------------------------------
# HandScore layout (plain int, bigger is stronger):
#   bits 20..23  category 0..8
#   bits 16..19  tie-break 0   ...   bits 0..3  tie-break 4
# Each tie-break field stores rank index + 1 (1..13); 0 marks an unused
# field. 16 slots per field for 14 values means no carry between fields.
# ------------------------------------------------------------

HandScore = int

_FIELD_BITS = 4
_FIELDS = 5
_CATEGORY_SHIFT = _FIELD_BITS * _FIELDS
_FIELD_MASK = (1 << _FIELD_BITS) - 1
SENTINEL = -1

_WHEEL = (1 << Rank.ACE) | 0b1111  # A + 2,3,4,5


def pack_score(category: int, ranks: Sequence[int]) -> HandScore:
    score = category
    for i in range(_FIELDS):
        r = ranks[i] if i < len(ranks) else SENTINEL
        score = (score << _FIELD_BITS) | (r + 1)
    return score


def hand_category(score: HandScore) -> int:
    return score >> _CATEGORY_SHIFT


def tiebreak_ranks(score: HandScore) -> Tuple[int, ...]:
    """Tie-break rank indices (0=2 .. 12=A), highest priority first, padding dropped."""
    out = []
    for i in range(_FIELDS - 1, -1, -1):
        v = (score >> (i * _FIELD_BITS)) & _FIELD_MASK
        if v:
            out.append(v - 1)
    return tuple(out)


def category_name(score: HandScore) -> str:
    return CATEGORY_NAME[hand_category(score)]


def describe(score: HandScore) -> str:
    name = category_name(score).replace("_", " ")
    ranks = tiebreak_ranks(score)
    if not ranks:
        return name
    top = Rank(ranks[0]).symbol
    if hand_category(score) in (CATEGORY["straight"], CATEGORY["straight_flush"]):
        return f"{name}, {top} high"
    return f"{name}, " + " ".join(Rank(r).symbol for r in ranks)


# ------------------------------------------------------------
# Rank masks
# ------------------------------------------------------------

def straight_high(mask: int) -> Optional[int]:
    """Highest straight in a 13-bit rank mask; the wheel counts as 5-high."""
    for hi in range(Rank.ACE, Rank.FIVE, -1):
        seq = 0b11111 << (hi - 4)
        if mask & seq == seq:
            return hi
    if mask & _WHEEL == _WHEEL:
        return int(Rank.FIVE)
    return None


def _top_from_mask(mask: int, n: int) -> List[int]:
    out = []
    for r in range(Rank.ACE, -1, -1):
        if (mask >> r) & 1:
            out.append(r)
            if len(out) == n:
                break
    return out


def _kickers(rank_counts: List[int], exclude: Tuple[int, ...], n: int) -> List[int]:
    # one entry per rank, best first, padded when the hand runs out
    out = []
    for r in range(Rank.ACE, -1, -1):
        if rank_counts[r] and r not in exclude:
            out.append(r)
            if len(out) == n:
                return out
    return out + [SENTINEL] * (n - len(out))


# ------------------------------------------------------------
# Evaluation
# ------------------------------------------------------------

def score_cards(cards: Sequence[Card]) -> HandScore:
    """
    Scores the best 5-card hand contained in 5..7 cards.

    No validation: callers guarantee distinct cards. This is the hot path
    used by the simulation driver.
    """
    rank_counts = [0] * 13
    suit_counts = [0] * 4
    suit_masks = [0] * 4
    mask = 0
    for c in cards:
        r = c.rank
        s = c.suit
        rank_counts[r] += 1
        suit_counts[s] += 1
        suit_masks[s] |= 1 << r
        mask |= 1 << r

    flush_suit = -1
    for s in range(4):
        if suit_counts[s] >= 5:
            flush_suit = s
            break

    if flush_suit >= 0:
        sf = straight_high(suit_masks[flush_suit])
        if sf is not None:
            return pack_score(CATEGORY["straight_flush"], (sf,))

    quads: List[int] = []
    trips: List[int] = []
    pairs: List[int] = []
    for r in range(Rank.ACE, -1, -1):
        n = rank_counts[r]
        if n == 4:
            quads.append(r)
        elif n == 3:
            trips.append(r)
        elif n == 2:
            pairs.append(r)

    if quads:
        q = quads[0]
        return pack_score(CATEGORY["quads"], (q, *_kickers(rank_counts, (q,), 1)))

    if trips and (len(trips) >= 2 or pairs):
        top = trips[0]
        second = trips[1] if len(trips) >= 2 else SENTINEL
        pair = max(second, pairs[0] if pairs else SENTINEL)
        return pack_score(CATEGORY["full_house"], (top, pair))

    if flush_suit >= 0:
        return pack_score(CATEGORY["flush"], _top_from_mask(suit_masks[flush_suit], 5))

    st = straight_high(mask)
    if st is not None:
        return pack_score(CATEGORY["straight"], (st,))

    if trips:
        t = trips[0]
        return pack_score(CATEGORY["trips"], (t, *_kickers(rank_counts, (t,), 2)))

    if len(pairs) >= 2:
        hi, lo = pairs[0], pairs[1]
        return pack_score(CATEGORY["two_pair"], (hi, lo, *_kickers(rank_counts, (hi, lo), 1)))

    if pairs:
        p = pairs[0]
        return pack_score(CATEGORY["pair"], (p, *_kickers(rank_counts, (p,), 3)))

    return pack_score(CATEGORY["high_card"], _kickers(rank_counts, (), 5))


def evaluate(cards: Iterable[CardLike]) -> HandScore:
    cs = parse_cards(cards)
    if not (5 <= len(cs) <= 7):
        raise InvalidRequestError(f"evaluate expects 5 to 7 cards, got {len(cs)}")
    check_unique(cs)
    return score_cards(cs)


def evaluate7(cards: Iterable[CardLike]) -> HandScore:
    cs = parse_cards(cards)
    if len(cs) != 7:
        raise InvalidRequestError(f"evaluate7 expects exactly 7 cards, got {len(cs)}")
    check_unique(cs)
    return score_cards(cs)


def compare_hands(hand1: Iterable[CardLike], hand2: Iterable[CardLike], board: Iterable[CardLike]) -> int:
    b = parse_cards(board)
    s1 = evaluate(parse_cards(hand1) + b)
    s2 = evaluate(parse_cards(hand2) + b)
    return 1 if s1 > s2 else (-1 if s2 > s1 else 0)


def winners(hands: Iterable[Iterable[CardLike]], board: Iterable[CardLike]) -> List[int]:
    b = parse_cards(board)
    scores = [evaluate(parse_cards(h) + b) for h in hands]
    best = max(scores)
    return [i for i, s in enumerate(scores) if s == best]
