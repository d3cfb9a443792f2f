"""Generate a career balance baseline.

Usage:
    uv run python scripts/generate_baselines.py [--runs 1000] [--output data/baselines/]
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path

from paddock.balance.baselines import generate_baseline, save_baseline
from paddock.balance.report import generate_text_report
from paddock.sim.content.registry import ContentRegistry
from paddock.sim.play_agents.heuristic_agent import HeuristicAgent
from paddock.sim.play_agents.random_agent import RandomAgent

_AGENTS = {"heuristic": HeuristicAgent, "random": RandomAgent}


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a career baseline")
    parser.add_argument("--runs", type=int, default=1_000, help="Number of careers")
    parser.add_argument("--output", type=str, default="data/baselines/", help="Output directory")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--agent", choices=sorted(_AGENTS), default="heuristic")
    parser.add_argument("--parallel", action="store_true", help="Use multiprocessing")
    args = parser.parse_args()

    print("Loading registry...")
    registry = ContentRegistry()
    registry.load_training_table()
    registry.load_schedules()

    print(f"Running {args.runs:,} careers...")
    t0 = time.perf_counter()
    baseline = generate_baseline(
        registry,
        num_runs=args.runs,
        base_seed=args.seed,
        agent_class=_AGENTS[args.agent],
        parallel=args.parallel,
    )
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s")

    out_dir = Path(args.output)
    json_path = out_dir / f"career_{args.agent}_{args.runs}.json"
    save_baseline(baseline, json_path)
    print(f"Saved baseline to {json_path}")

    print()
    print(generate_text_report(baseline))


if __name__ == "__main__":
    main()
