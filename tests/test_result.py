import pytest

from holdem_equity.engine.result import ComputeResult, Status, Tally, TrialOutcome
from holdem_equity.errors import InvalidRequestError


def _outcome(credit, tied=False, ways=1):
    return TrialOutcome(hero_score=0, opponent_scores=(), credit=credit, tied=tied, split_ways=ways)

def test_tally_counts_wins_ties_and_losses():
    t = Tally()
    t.add(_outcome(1.0))
    t.add(_outcome(0.0))
    t.add(_outcome(0.5, tied=True, ways=2))
    t.add(_outcome(1 / 3, tied=True, ways=3))
    assert t.samples == 4
    assert t.wins == 1
    assert t.ties == 2
    assert t.expected_wins == pytest.approx(1 + 0.5 + 1 / 3)

def test_tally_to_result():
    t = Tally()
    for _ in range(3):
        t.add(_outcome(1.0))
    t.add(_outcome(0.5, tied=True, ways=2))
    res = t.to_result()
    assert res.status is Status.OK
    assert res.win_pct == pytest.approx(87.5)
    assert res.tie_pct == pytest.approx(25.0)
    assert res.samples == 4

def test_merge_order_does_not_matter():
    a, b = Tally(), Tally()
    a.add(_outcome(1 / 3, tied=True, ways=3))
    a.add(_outcome(1.0))
    b.add(_outcome(0.5, tied=True, ways=2))
    b.add(_outcome(0.0))

    ab = Tally(); ab.merge(a); ab.merge(b)
    ba = Tally(); ba.merge(b); ba.merge(a)
    assert ab == ba
    assert ab.to_result() == ba.to_result()

def test_empty_tally_cannot_be_aggregated():
    with pytest.raises(InvalidRequestError):
        Tally().to_result()

def test_incomplete_result_shape():
    res = ComputeResult.incomplete("hero incomplete")
    assert res.to_dict() == {
        "status": "incomplete", "winPct": 0.0, "tiePct": 0.0, "samples": 0, "detail": "hero incomplete",
    }
    assert not res.ok

def test_result_dict_omits_missing_detail():
    res = ComputeResult(status=Status.OK, win_pct=50.0, tie_pct=1.0, samples=10)
    assert "detail" not in res.to_dict()
    assert res.to_dict()["status"] == "ok"
