from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .errors import ConfigError, InvalidRequestError
from .helpers.abstraction import Street

MAX_OPPONENTS = 8

# Later streets leave fewer unknown cards per trial, so a larger sample
# count stays affordable there.
DEFAULT_SAMPLES: Dict[Street, int] = {
    Street.PREFLOP: 15_000,
    Street.FLOP: 25_000,
    Street.TURN: 35_000,
    Street.RIVER: 50_000,
}
DEFAULT_BATCH_SIZE = 1_000


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return value


@dataclass(frozen=True)
class SimulationConfig:
    """
    Tunables for one simulate() call.

    samples     trials per street
    batch_size  trials between cancellation checks; also the unit of work
                handed to a worker process
    workers     1 runs in-process, >1 fans batches out over a process pool
    time_limit  optional wall-clock budget in seconds, checked between batches
    """
    samples: Mapping[Street, int] = field(default_factory=lambda: dict(DEFAULT_SAMPLES))
    batch_size: int = DEFAULT_BATCH_SIZE
    workers: int = 1
    time_limit: Optional[float] = None

    def __post_init__(self) -> None:
        samples: Dict[Street, int] = dict(DEFAULT_SAMPLES)
        for k, v in self.samples.items():
            try:
                street = Street.parse(k)
            except InvalidRequestError as e:
                raise ConfigError(str(e)) from None
            samples[street] = _positive_int(f"samples[{street.name}]", v)
        object.__setattr__(self, "samples", samples)
        _positive_int("batch_size", self.batch_size)
        _positive_int("workers", self.workers)
        if self.time_limit is not None:
            if isinstance(self.time_limit, bool) or not isinstance(self.time_limit, (int, float)) or self.time_limit <= 0:
                raise ConfigError(f"time_limit must be a positive number, got {self.time_limit!r}")

    def samples_for(self, street: Street) -> int:
        return self.samples[street]

    def with_samples(self, n: int) -> "SimulationConfig":
        n = _positive_int("samples", n)
        return replace(self, samples={s: n for s in Street})

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SimulationConfig":
        known = {"samples", "batch_size", "workers", "time_limit"}
        unknown = set(d) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        samples = d.get("samples", {})
        if isinstance(samples, int) and not isinstance(samples, bool):
            samples = {s: samples for s in Street}
        elif not isinstance(samples, Mapping):
            raise ConfigError(f"samples must be a mapping or an integer, got {samples!r}")
        return cls(
            samples=samples,
            batch_size=d.get("batch_size", DEFAULT_BATCH_SIZE),
            workers=d.get("workers", 1),
            time_limit=d.get("time_limit"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "samples": {s.name: n for s, n in self.samples.items()},
            "batch_size": self.batch_size,
            "workers": self.workers,
            "time_limit": self.time_limit,
        }


def load_config(path: Union[str, Path]) -> SimulationConfig:
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {p}") from None
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {p} is not valid JSON: {e}") from None
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {p} must hold a JSON object")
    return SimulationConfig.from_dict(data)
