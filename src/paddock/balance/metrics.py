"""Pure metric computation functions for balance analysis.

All functions take a list of CareerTelemetry and return structured metrics.
No side effects, no I/O.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from paddock.balance.models import GlobalMetrics, RaceMetrics, TrainingMetrics

if TYPE_CHECKING:
    from paddock.sim.telemetry import CareerTelemetry


def compute_global_metrics(runs: list[CareerTelemetry]) -> GlobalMetrics:
    """Compute aggregate career statistics."""
    total = len(runs)
    if total == 0:
        return GlobalMetrics(
            total_careers=0, total_races=0, race_wins=0, race_win_rate=0.0,
            avg_wins_per_career=0.0, sweep_rate=0.0, avg_final_stat_total=0.0,
            avg_final_energy=0.0, avg_failed_actions=0.0,
        )

    total_races = sum(len(r.races) for r in runs)
    race_wins = sum(r.wins for r in runs)
    sweeps = sum(1 for r in runs if r.races and r.wins == len(r.races))

    return GlobalMetrics(
        total_careers=total,
        total_races=total_races,
        race_wins=race_wins,
        race_win_rate=race_wins / total_races if total_races else 0.0,
        avg_wins_per_career=race_wins / total,
        sweep_rate=sweeps / total,
        avg_final_stat_total=sum(sum(r.final_stats.values()) for r in runs) / total,
        avg_final_energy=sum(r.final_energy for r in runs) / total,
        avg_failed_actions=sum(r.failed_actions for r in runs) / total,
    )


def compute_training_metrics(
    runs: list[CareerTelemetry],
    avg_wins: float,
) -> list[TrainingMetrics]:
    """Compute per-training choice metrics from career telemetry."""
    if not runs:
        return []

    chosen: Counter[str] = Counter()
    for r in runs:
        chosen.update(r.actions)
    all_actions = sum(chosen.values())

    results: list[TrainingMetrics] = []
    for training in sorted(chosen):
        using = [r for r in runs if training in r.actions]
        wins_using = sum(r.wins for r in using) / len(using)
        results.append(TrainingMetrics(
            training=training,
            times_chosen=chosen[training],
            choice_rate=chosen[training] / all_actions,
            careers_using=len(using),
            avg_wins_using=wins_using,
            wins_delta=wins_using - avg_wins,
        ))

    return results


def compute_race_metrics(runs: list[CareerTelemetry]) -> list[RaceMetrics]:
    """Compute per-race results, in schedule order of first appearance."""
    order: list[str] = []
    positions: dict[str, list[int]] = defaultdict(list)
    strategies: dict[str, Counter[str]] = defaultdict(Counter)
    strategy_wins: dict[str, Counter[str]] = defaultdict(Counter)

    for r in runs:
        for outcome in r.races:
            if outcome.race not in positions:
                order.append(outcome.race)
            positions[outcome.race].append(outcome.player_position)
            strategy = outcome.strategy or "NONE"
            strategies[outcome.race][strategy] += 1
            if outcome.won:
                strategy_wins[outcome.race][strategy] += 1

    results: list[RaceMetrics] = []
    for race in order:
        finishes = positions[race]
        wins = sum(1 for p in finishes if p == 1)
        picks = strategies[race]
        results.append(RaceMetrics(
            race=race,
            runs=len(finishes),
            wins=wins,
            win_rate=wins / len(finishes),
            avg_position=sum(finishes) / len(finishes),
            strategies=dict(picks),
            strategy_win_rates={
                s: strategy_wins[race][s] / n for s, n in sorted(picks.items())
            },
        ))

    return results
