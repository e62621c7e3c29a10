from __future__ import annotations

import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from holdem_equity.config import SimulationConfig
from holdem_equity.engine.simulation import simulate
from holdem_equity.errors import EquityError
from holdem_equity.helpers.cards import parse_cards
from holdem_equity.helpers.evaluator import describe, evaluate
from holdem_equity.logging_config import configure_logging, get_logger

log = get_logger("holdem_equity.worker")

# Line-delimited JSON protocol for a UI process:
#   {"type": "configure", "samples": 20000, "workers": 2}
#   {"type": "compute", "id": 7, "hero": ["Ah", "As"], "board": ["Kd", null, ...], "opponents": 2}
#   {"type": "describe", "cards": ["Ah", "Kh", "Qh", "Jh", "Th"]}
# Every request gets exactly one reply line.

STATE: Dict[str, Any] = {"config": SimulationConfig()}


def _jwrite(obj: Dict[str, Any], out: TextIO) -> None:
    out.write(json.dumps(obj) + "\n")
    out.flush()


def _hand_strength_name(cards: List[str]) -> str:
    if len(cards) < 5:
        return "unknown"
    return describe(evaluate(parse_cards(cards)))


def handle(msg: Dict[str, Any], out: TextIO = sys.stdout) -> None:
    t = msg.get("type")
    rid = msg.get("id")

    if t == "configure":
        d = {k: v for k, v in msg.items() if k not in ("type", "id")}
        STATE["config"] = SimulationConfig.from_dict(d)
        _jwrite({"type": "configured", "id": rid, "config": STATE["config"].to_dict()}, out)
        return

    if t == "compute":
        cfg: SimulationConfig = STATE["config"]
        samples = msg.get("samples")
        if samples is not None:
            cfg = cfg.with_samples(samples)
        res = simulate(
            msg.get("hero", []),
            msg.get("board", []),
            opponents=msg.get("opponents", 0),
            stage=msg.get("stage"),
            config=cfg,
            seed=msg.get("seed"),
        )
        _jwrite({"type": "result", "id": rid, **res.to_dict()}, out)
        return

    if t == "describe":
        _jwrite({"type": "hand", "id": rid, "name": _hand_strength_name(msg.get("cards", []))}, out)
        return

    _jwrite({"type": "error", "id": rid, "message": f"Unknown message type: {t}"}, out)


def main(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    for line in stdin:
        line = line.strip()
        if not line:
            continue
        try:
            msg = json.loads(line)
        except json.JSONDecodeError as e:
            _jwrite({"type": "error", "message": f"Bad JSON: {e}"}, stdout)
            continue
        if not isinstance(msg, dict):
            _jwrite({"type": "error", "message": "Request must be a JSON object"}, stdout)
            continue
        try:
            handle(msg, stdout)
        except EquityError as e:
            log.warning("rejected request %r: %s", msg.get("id"), e)
            _jwrite({"type": "error", "id": msg.get("id"), "message": str(e)}, stdout)


if __name__ == "__main__":
    configure_logging("WARNING")
    main()
