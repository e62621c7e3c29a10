from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..errors import InvalidRequestError
from ..helpers.evaluator import HandScore


class Status(str, Enum):
    OK = "ok"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True, slots=True)
class ComputeResult:
    status: Status
    win_pct: float
    tie_pct: float
    samples: int
    detail: Optional[str] = None

    @classmethod
    def incomplete(cls, detail: str) -> "ComputeResult":
        return cls(status=Status.INCOMPLETE, win_pct=0.0, tie_pct=0.0, samples=0, detail=detail)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    def to_dict(self) -> Dict[str, Any]:
        """External (camelCase) form handed to the UI layer."""
        d: Dict[str, Any] = {
            "status": self.status.value,
            "winPct": self.win_pct,
            "tiePct": self.tie_pct,
            "samples": self.samples,
        }
        if self.detail is not None:
            d["detail"] = self.detail
        return d


@dataclass(frozen=True, slots=True)
class TrialOutcome:
    hero_score: HandScore
    opponent_scores: Tuple[HandScore, ...]
    credit: float
    tied: bool
    # hands sharing the best score, hero included; 1 when hero wins or loses outright
    split_ways: int = 1


@dataclass(slots=True)
class Tally:
    """
    Running win/tie credit for a batch of trials.

    Split pots are kept as integer counts keyed by how many hands share the
    pot, so merging partial tallies is exact and order independent.
    """
    samples: int = 0
    wins: int = 0
    ties: int = 0
    splits: Dict[int, int] = field(default_factory=dict)

    def add(self, outcome: TrialOutcome) -> None:
        self.samples += 1
        if outcome.tied:
            self.ties += 1
            self.splits[outcome.split_ways] = self.splits.get(outcome.split_ways, 0) + 1
        elif outcome.credit > 0:
            self.wins += 1

    def merge(self, other: "Tally") -> None:
        self.samples += other.samples
        self.wins += other.wins
        self.ties += other.ties
        for ways, n in other.splits.items():
            self.splits[ways] = self.splits.get(ways, 0) + n

    @property
    def expected_wins(self) -> float:
        # fixed summation order keeps the float bit-identical across merges
        return self.wins + sum(n / ways for ways, n in sorted(self.splits.items()))

    def to_result(self, detail: Optional[str] = None) -> ComputeResult:
        if self.samples <= 0:
            raise InvalidRequestError("cannot aggregate a tally with no samples")
        return ComputeResult(
            status=Status.OK,
            win_pct=100.0 * self.expected_wins / self.samples,
            tie_pct=100.0 * self.ties / self.samples,
            samples=self.samples,
            detail=detail,
        )
