"""Pydantic v2 models for career balance data.

These models define the structured output of balance analysis:
per-training metrics, per-race metrics and global career statistics.
All are serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TrainingMetrics(BaseModel):
    """How often one training type is chosen and how careers using it fare."""

    training: str
    times_chosen: int
    choice_rate: float
    """times_chosen / all actions across the batch."""
    careers_using: int
    """Careers that chose this training at least once."""
    avg_wins_using: float
    """Mean race wins among careers_using."""
    wins_delta: float
    """avg_wins_using - global average wins per career."""


class RaceMetrics(BaseModel):
    """Per-race results across a batch."""

    race: str
    runs: int
    wins: int
    win_rate: float
    avg_position: float
    strategies: dict[str, int] = Field(default_factory=dict)
    """Strategy -> times chosen for this race."""
    strategy_win_rates: dict[str, float] = Field(default_factory=dict)


class GlobalMetrics(BaseModel):
    """Aggregate career statistics."""

    total_careers: int
    total_races: int
    race_wins: int
    race_win_rate: float
    avg_wins_per_career: float
    sweep_rate: float
    """Fraction of careers that won every race they ran."""
    avg_final_stat_total: float
    avg_final_energy: float
    avg_failed_actions: float


class CareerBaseline(BaseModel):
    """Top-level baseline data structure."""

    agent: str
    """Agent class used for generation (e.g. 'HeuristicAgent')."""
    num_runs: int
    generated_at: str
    """ISO 8601 timestamp."""
    global_metrics: GlobalMetrics
    training_metrics: list[TrainingMetrics]
    race_metrics: list[RaceMetrics]
