"""Compare RandomAgent vs HeuristicAgent over many careers.

Usage:
    uv run python scripts/compare_agents.py [--runs N] [--seed S] [--parallel]
"""

from __future__ import annotations

import argparse
import time

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from paddock.balance.metrics import compute_global_metrics, compute_race_metrics
from paddock.sim.content.registry import ContentRegistry
from paddock.sim.play_agents.heuristic_agent import HeuristicAgent
from paddock.sim.play_agents.random_agent import RandomAgent
from paddock.sim.runner import BatchCareerRunner


def run_comparison(n_runs: int = 500, base_seed: int = 0, parallel: bool = False) -> None:
    print("Loading registry...")
    registry = ContentRegistry()
    registry.load_training_table()
    registry.load_schedules()

    results = {}
    for label, agent_class in [("RandomAgent", RandomAgent), ("HeuristicAgent", HeuristicAgent)]:
        print(f"\nRunning {n_runs} careers with {label}...")
        runner = BatchCareerRunner(registry, agent_class=agent_class)
        t0 = time.time()
        telemetry = runner.run_batch(n_runs, base_seed=base_seed, parallel=parallel)
        elapsed = time.time() - t0

        wins = [r.wins for r in telemetry]
        stat_totals = [sum(r.final_stats.values()) for r in telemetry]
        global_metrics = compute_global_metrics(telemetry)

        results[label] = {
            "telemetry": telemetry,
            "wins": wins,
            "stat_totals": stat_totals,
            "global": global_metrics,
            "races": compute_race_metrics(telemetry),
            "elapsed": elapsed,
        }

        print(f"  Time: {elapsed:.1f}s ({elapsed/n_runs*1000:.1f}ms/career)")
        print(f"  Race win rate: {global_metrics.race_win_rate:.1%}")
        print(f"  Avg wins/career: {np.mean(wins):.2f} (median {np.median(wins):.0f})")
        print(f"  Sweep rate: {global_metrics.sweep_rate:.1%}")
        print(f"  Avg final stat total: {np.mean(stat_totals):.1f}")

    generate_charts(results, n_runs)


def generate_charts(results: dict, n_runs: int) -> None:
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"RandomAgent vs HeuristicAgent - {n_runs} Careers", fontsize=16, fontweight="bold")

    colors = {"RandomAgent": "#e74c3c", "HeuristicAgent": "#2ecc71"}
    labels = list(results.keys())

    # --- Chart 1: Win rate per race ---
    ax = axes[0, 0]
    race_names = [r.race for r in results[labels[0]]["races"]]
    x = np.arange(len(race_names))
    width = 0.38
    for i, label in enumerate(labels):
        rates = {r.race: r.win_rate * 100 for r in results[label]["races"]}
        ax.bar(x + (i - 0.5) * width, [rates.get(n, 0.0) for n in race_names], width,
               label=label, color=colors[label], edgecolor="black", linewidth=0.5)
    ax.set_xticks(x)
    ax.set_xticklabels(race_names, rotation=15)
    ax.set_ylabel("Win Rate (%)")
    ax.set_title("Win Rate by Race")
    ax.legend()

    # --- Chart 2: Wins per career ---
    ax = axes[0, 1]
    max_wins = max(max(results[l]["wins"]) for l in labels)
    bins = np.arange(-0.5, max_wins + 1.5, 1)
    for label in labels:
        wins = results[label]["wins"]
        ax.hist(wins, bins=bins, alpha=0.6, label=f'{label} (avg={np.mean(wins):.2f})',
                color=colors[label], edgecolor="black", linewidth=0.3)
    ax.set_xlabel("Races Won Per Career")
    ax.set_ylabel("Count")
    ax.set_title("Wins Distribution")
    ax.legend()

    # --- Chart 3: Final stat totals ---
    ax = axes[1, 0]
    for label in labels:
        totals = results[label]["stat_totals"]
        ax.hist(totals, bins=30, alpha=0.6, label=f'{label} (avg={np.mean(totals):.1f})',
                color=colors[label], edgecolor="black", linewidth=0.3)
    ax.set_xlabel("Final Stat Total")
    ax.set_ylabel("Count")
    ax.set_title("Final Stat Total Distribution")
    ax.legend()

    # --- Chart 4: Summary Table ---
    ax = axes[1, 1]
    ax.axis("off")
    row_labels = [
        "Race Win Rate",
        "Avg Wins",
        "Sweep Rate",
        "Avg Stat Total",
        "Avg Final Energy",
        "Avg Failed Actions",
        "Time (s)",
    ]
    table_data = []
    for metric in row_labels:
        row = []
        for label in labels:
            r = results[label]
            g = r["global"]
            if metric == "Race Win Rate":
                row.append(f"{g.race_win_rate:.1%}")
            elif metric == "Avg Wins":
                row.append(f"{g.avg_wins_per_career:.2f}")
            elif metric == "Sweep Rate":
                row.append(f"{g.sweep_rate:.1%}")
            elif metric == "Avg Stat Total":
                row.append(f"{g.avg_final_stat_total:.1f}")
            elif metric == "Avg Final Energy":
                row.append(f"{g.avg_final_energy:.1f}")
            elif metric == "Avg Failed Actions":
                row.append(f"{g.avg_failed_actions:.2f}")
            elif metric == "Time (s)":
                row.append(f'{r["elapsed"]:.1f}')
        table_data.append(row)

    table = ax.table(
        cellText=table_data,
        rowLabels=row_labels,
        colLabels=labels,
        cellLoc="center",
        loc="center",
    )
    table.auto_set_font_size(False)
    table.set_fontsize(11)
    table.scale(1.0, 1.6)

    # Color the header cells
    for j, label in enumerate(labels):
        table[0, j].set_facecolor(colors[label])
        table[0, j].set_text_props(color="white", fontweight="bold")

    plt.tight_layout()
    out_path = "agent_comparison.png"
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved to {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--runs", type=int, default=500, help="Number of careers per agent")
    parser.add_argument("--seed", type=int, default=0, help="Base seed")
    parser.add_argument("--parallel", action="store_true", help="Use multiprocessing")
    args = parser.parse_args()
    run_comparison(args.runs, args.seed, args.parallel)
