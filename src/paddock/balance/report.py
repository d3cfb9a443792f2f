"""Human-readable report for a career baseline."""

from __future__ import annotations

from paddock.balance.models import CareerBaseline


def generate_text_report(baseline: CareerBaseline) -> str:
    """Generate a terminal/markdown summary of the baseline."""
    g = baseline.global_metrics
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Career Baseline Report - {baseline.agent}")
    lines.append(f"Runs: {baseline.num_runs:,} | Generated: {baseline.generated_at}")
    lines.append("=" * 60)

    lines.append("")
    lines.append("## Global Stats")
    lines.append(f"  Race win rate:    {g.race_win_rate:.1%} ({g.race_wins}/{g.total_races})")
    lines.append(f"  Wins per career:  {g.avg_wins_per_career:.2f}")
    lines.append(f"  Sweep rate:       {g.sweep_rate:.1%}")
    lines.append(f"  Final stat total: {g.avg_final_stat_total:.1f}")
    lines.append(f"  Final energy:     {g.avg_final_energy:.1f}")
    lines.append(f"  Failed actions:   {g.avg_failed_actions:.2f}")

    lines.append("")
    lines.append("## Training Choices")
    by_rate = sorted(baseline.training_metrics, key=lambda t: t.choice_rate, reverse=True)
    for t in by_rate:
        lines.append(
            f"  {t.training:10s}  chosen={t.choice_rate:.1%}"
            f"  wins_delta={t.wins_delta:+.3f}"
            f"  careers={t.careers_using}"
        )

    lines.append("")
    lines.append("## Races")
    for r in baseline.race_metrics:
        best = max(r.strategy_win_rates.items(), key=lambda kv: kv[1], default=("-", 0.0))
        lines.append(
            f"  {r.race:24s}  win={r.win_rate:.1%}"
            f"  avg_pos={r.avg_position:.2f}"
            f"  best_strategy={best[0]} ({best[1]:.1%})"
        )

    lines.append("")
    return "\n".join(lines)
