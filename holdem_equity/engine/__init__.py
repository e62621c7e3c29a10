from .result import ComputeResult, Status, Tally, TrialOutcome
from .simulation import simulate, run_trial, trial_credit

__all__ = [
    "ComputeResult",
    "Status",
    "Tally",
    "TrialOutcome",
    "simulate",
    "run_trial",
    "trial_credit",
]
