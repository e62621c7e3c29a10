from .config import SimulationConfig, load_config, MAX_OPPONENTS
from .engine import ComputeResult, Status, simulate
from .errors import (
    EquityError,
    InvalidRequestError,
    CardParseError,
    DeckExhaustedError,
    ConfigError,
)
from .helpers import Card, Rank, Suit, Street, evaluate7

__version__ = "0.1.0"

__all__ = [
    "SimulationConfig", "load_config", "MAX_OPPONENTS",
    "ComputeResult", "Status", "simulate",
    "EquityError", "InvalidRequestError", "CardParseError", "DeckExhaustedError", "ConfigError",
    "Card", "Rank", "Suit", "Street", "evaluate7",
]
