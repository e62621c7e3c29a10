from __future__ import annotations

import logging
import random
import time
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait
from typing import Iterator, List, Optional, Protocol, Sequence, Set, Tuple, Union

from ..config import MAX_OPPONENTS, SimulationConfig
from ..errors import InvalidRequestError
from ..helpers.abstraction import (
    Street,
    board_slots,
    card_to_id,
    check_unique,
    hero_slots,
    id_to_card,
    street_from_board,
)
from ..helpers.cards import Card, CardLike
from ..helpers.deck import Deck, full_deck_minus
from ..helpers.evaluator import HandScore, score_cards
from .result import ComputeResult, Tally, TrialOutcome

logger = logging.getLogger(__name__)


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


# (hero ids, board ids, opponents, unknown-card ids); ids keep worker payloads small
_Job = Tuple[Tuple[int, ...], Tuple[int, ...], int, Tuple[int, ...]]


def trial_credit(hero_score: HandScore, opponent_scores: Sequence[HandScore]) -> Tuple[float, bool, int]:
    """
    Returns (credit, tied, split_ways) for one showdown.

    Hero alone at the top earns 1. Hero sharing the top with k opponents earns
    1/(k+1) and the trial counts as a tie. Anything else earns 0.
    """
    if not opponent_scores:
        return 1.0, False, 1
    best = max(opponent_scores)
    if hero_score > best:
        return 1.0, False, 1
    if hero_score < best:
        return 0.0, False, 1
    k = sum(1 for s in opponent_scores if s == best)
    return 1.0 / (k + 1), True, k + 1


def run_trial(hero: Sequence[Card], board: Sequence[Card], opponents: int, deck: Deck) -> TrialOutcome:
    """One random completion: fill the board, deal every opponent, score the showdown."""
    full_board = list(board)
    while len(full_board) < 5:
        full_board.append(deck.draw())

    hero_score = score_cards([hero[0], hero[1], *full_board])
    opp_scores = []
    for _ in range(opponents):
        c1 = deck.draw()
        c2 = deck.draw()
        opp_scores.append(score_cards([c1, c2, *full_board]))

    credit, tied, ways = trial_credit(hero_score, opp_scores)
    return TrialOutcome(
        hero_score=hero_score,
        opponent_scores=tuple(opp_scores),
        credit=credit,
        tied=tied,
        split_ways=ways,
    )


def run_batch(job: _Job, n: int, seed: int) -> Tally:
    hero_ids, board_ids, opponents, snapshot_ids = job
    hero = [id_to_card(i) for i in hero_ids]
    board = [id_to_card(i) for i in board_ids]
    snapshot = tuple(id_to_card(i) for i in snapshot_ids)

    rng = random.Random(seed)
    tally = Tally()
    for _ in range(n):
        deck = Deck.from_snapshot(snapshot, rng)
        tally.add(run_trial(hero, board, opponents, deck))
    return tally


# ------------------------------------------------------------
# Request handling
# ------------------------------------------------------------

def _check_opponents(opponents: int) -> None:
    if isinstance(opponents, bool) or not isinstance(opponents, int):
        raise InvalidRequestError(f"opponents must be an int, got {opponents!r}")
    if not (0 <= opponents <= MAX_OPPONENTS):
        raise InvalidRequestError(f"opponents must be within 0..{MAX_OPPONENTS}, got {opponents}")


def _plan_batches(samples: int, batch_size: int) -> List[int]:
    full, rest = divmod(samples, batch_size)
    return [batch_size] * full + ([rest] if rest else [])


def _should_stop(cancel: Optional[CancelToken], deadline: Optional[float]) -> bool:
    if cancel is not None and cancel.is_set():
        return True
    return deadline is not None and time.monotonic() >= deadline


def _run_serial(
    job: _Job,
    batches: Sequence[Tuple[int, int]],
    cancel: Optional[CancelToken],
    deadline: Optional[float],
) -> Tally:
    tally = Tally()
    for n, seed in batches:
        if _should_stop(cancel, deadline):
            break
        tally.merge(run_batch(job, n, seed))
    return tally


def _run_pool(
    job: _Job,
    batches: Sequence[Tuple[int, int]],
    workers: int,
    cancel: Optional[CancelToken],
    deadline: Optional[float],
) -> Tally:
    tally = Tally()
    if _should_stop(cancel, deadline):
        return tally
    pending: Iterator[Tuple[int, int]] = iter(batches)
    active: Set[Future] = set()
    stopped = False

    with ProcessPoolExecutor(max_workers=workers) as ex:
        def submit_next() -> bool:
            nxt = next(pending, None)
            if nxt is None:
                return False
            active.add(ex.submit(run_batch, job, nxt[0], nxt[1]))
            return True

        for _ in range(workers):
            if not submit_next():
                break

        while active:
            done, _ = wait(active, return_when=FIRST_COMPLETED)
            for f in done:
                active.discard(f)
                tally.merge(f.result())
            if not stopped and _should_stop(cancel, deadline):
                stopped = True
            if not stopped:
                while len(active) < workers and submit_next():
                    pass
    return tally


def simulate(
    hero: Sequence[Optional[CardLike]],
    board: Sequence[Optional[CardLike]] = (),
    opponents: int = 0,
    stage: Optional[Union[Street, str, int]] = None,
    *,
    config: Optional[SimulationConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    cancel: Optional[CancelToken] = None,
) -> ComputeResult:
    """
    Monte Carlo equity of `hero` against `opponents` uniformly random hands.

    An explicit `stage` decides the sample budget and how many board cards must
    already be revealed; without one the stage follows the revealed count.
    Missing inputs give an `incomplete` result; contradictory ones (duplicates,
    bad counts, unparseable cards) raise InvalidRequestError.

    Cancellation (`cancel.is_set()` or the config time limit) is checked between
    batches. A cancelled call still returns `ok`, computed from the trials that
    finished; `samples` tells how many that was.
    """
    cfg = config if config is not None else SimulationConfig()
    if rng is not None and seed is not None:
        raise InvalidRequestError("pass either rng or seed, not both")

    h1, h2 = hero_slots(hero)
    revealed = board_slots(board)
    _check_opponents(opponents)
    street = Street.parse(stage) if stage is not None else street_from_board(len(revealed))

    known = [c for c in (h1, h2) if c is not None] + revealed
    check_unique(known)

    if h1 is None or h2 is None:
        return ComputeResult.incomplete("hero incomplete")
    if len(revealed) < street.revealed:
        return ComputeResult.incomplete(f"board incomplete for {street.name}")
    if stage is not None and len(revealed) > street.revealed:
        logger.debug("stage %s declared with %d board cards revealed; all are treated as known", street.name, len(revealed))

    samples = cfg.samples_for(street)
    base = full_deck_minus(known)
    job: _Job = (
        (card_to_id(h1), card_to_id(h2)),
        tuple(card_to_id(c) for c in revealed),
        opponents,
        tuple(card_to_id(c) for c in base.snapshot()),
    )

    master = rng if rng is not None else random.Random(seed)
    batches = [(n, master.getrandbits(64)) for n in _plan_batches(samples, cfg.batch_size)]
    deadline = time.monotonic() + cfg.time_limit if cfg.time_limit is not None else None

    logger.debug(
        "simulate street=%s hero=%s%s board=%s opponents=%d samples=%d batches=%d workers=%d",
        street.name, h1, h2, "".join(str(c) for c in revealed), opponents, samples, len(batches), cfg.workers,
    )
    started = time.perf_counter()

    if cfg.workers > 1 and len(batches) > 1:
        tally = _run_pool(job, batches, min(cfg.workers, len(batches)), cancel, deadline)
    else:
        tally = _run_serial(job, batches, cancel, deadline)

    elapsed = time.perf_counter() - started
    if tally.samples == 0:
        logger.info("simulation cancelled before any trial completed")
        return ComputeResult.incomplete("cancelled")
    if tally.samples < samples:
        logger.info("simulation cancelled after %d of %d samples (%.2fs)", tally.samples, samples, elapsed)
        return tally.to_result(detail=f"cancelled after {tally.samples} of {samples} samples")

    result = tally.to_result()
    logger.debug("simulate done win=%.2f%% tie=%.2f%% in %.2fs", result.win_pct, result.tie_pct, elapsed)
    return result
