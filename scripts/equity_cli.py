# scripts/equity_cli.py
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from holdem_equity.config import SimulationConfig, load_config
from holdem_equity.engine.simulation import simulate
from holdem_equity.errors import EquityError
from holdem_equity.logging_config import configure_logging, get_logger

log = get_logger("holdem_equity.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Monte Carlo Texas Hold'em equity.")
    ap.add_argument("--hero", nargs="+", default=[], help="hero hole cards, e.g. Ah As")
    ap.add_argument("--board", nargs="*", default=[], help="revealed board cards in order")
    ap.add_argument("--opponents", type=int, default=1)
    ap.add_argument("--stage", type=str, default=None, help="PREFLOP/FLOP/TURN/RIVER; derived from the board if omitted")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--samples", type=int, default=None, help="override the per-street sample count")
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--time_limit", type=float, default=None)
    ap.add_argument("--config", type=str, default=None, help="JSON config file")
    ap.add_argument("--log_level", type=str, default="WARNING")
    ap.add_argument("--log_file", type=str, default=None)
    return ap


def resolve_config(args: argparse.Namespace) -> SimulationConfig:
    cfg = load_config(args.config) if args.config else SimulationConfig()
    if args.samples is not None:
        cfg = cfg.with_samples(args.samples)
    overrides = cfg.to_dict()
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.time_limit is not None:
        overrides["time_limit"] = args.time_limit
    return SimulationConfig.from_dict(overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        cfg = resolve_config(args)
        res = simulate(
            args.hero,
            args.board,
            opponents=args.opponents,
            stage=args.stage,
            config=cfg,
            seed=args.seed,
        )
    except EquityError as e:
        log.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(res.to_dict()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
