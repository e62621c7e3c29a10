import argparse

import matplotlib.pyplot as plt
import numpy as np

from holdem_equity.config import SimulationConfig
from holdem_equity.engine.simulation import simulate

# --- CONFIGURATION ---
HERO = ["Ah", "As"]
BOARD = []
OPPONENTS = 1
SAMPLE_STEPS = [250, 500, 1000, 2500, 5000, 10000, 15000]
SEEDS = 8
OUT_FILE = 'graph_equity_convergence.png'


# 1. RUN THE ENGINE AT EACH SAMPLE SIZE
def collect(hero, board, opponents, steps, seeds):
    estimates = np.zeros((len(steps), seeds))
    for i, n in enumerate(steps):
        cfg = SimulationConfig().with_samples(n)
        for j in range(seeds):
            res = simulate(hero, board, opponents=opponents, config=cfg, seed=1000 * i + j)
            if not res.ok:
                raise SystemExit(f"Engine returned {res.status.value}: {res.detail}")
            estimates[i, j] = res.win_pct
        print(f"{n:>6} samples: mean {estimates[i].mean():.2f}%  std {estimates[i].std(ddof=1):.2f}")
    return estimates


# --- GRAPH: ESTIMATE SPREAD VS SAMPLE COUNT ---
def plot_convergence(steps, estimates, title, out_file):
    steps = np.asarray(steps)
    mean = estimates.mean(axis=1)
    std = estimates.std(axis=1, ddof=1)

    plt.figure(figsize=(10, 6))
    for j in range(estimates.shape[1]):
        plt.plot(steps, estimates[:, j], color='#1f77b4', alpha=0.25, linewidth=1)
    plt.plot(steps, mean, color='#d62728', linewidth=2, label='Mean over seeds')
    plt.fill_between(steps, mean - 2 * std, mean + 2 * std, color='#d62728', alpha=0.15, label='±2 std')

    plt.xscale('log')
    plt.title(title, fontsize=14, fontweight='bold')
    plt.xlabel('Samples per estimate', fontsize=12)
    plt.ylabel('Win % (tie share included)', fontsize=12)
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(out_file, dpi=300)
    print(f"Saved '{out_file}'")
    plt.show()


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--hero", nargs=2, default=HERO)
    ap.add_argument("--board", nargs="*", default=BOARD)
    ap.add_argument("--opponents", type=int, default=OPPONENTS)
    ap.add_argument("--seeds", type=int, default=SEEDS)
    ap.add_argument("--out", type=str, default=OUT_FILE)
    args = ap.parse_args()

    est = collect(args.hero, args.board, args.opponents, SAMPLE_STEPS, args.seeds)
    label = " ".join(args.hero) + (" | " + " ".join(args.board) if args.board else "")
    plot_convergence(SAMPLE_STEPS, est, f'Equity convergence: {label} vs {args.opponents}', args.out)
