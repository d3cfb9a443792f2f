"""Baseline generation: run careers, compute metrics, save/load JSON.

Orchestrates BatchCareerRunner → metric computation → CareerBaseline model.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from paddock.balance.metrics import (
    compute_global_metrics,
    compute_race_metrics,
    compute_training_metrics,
)
from paddock.balance.models import CareerBaseline
from paddock.sim.play_agents.heuristic_agent import HeuristicAgent
from paddock.sim.runner import BatchCareerRunner

if TYPE_CHECKING:
    from paddock.sim.content.registry import ContentRegistry
    from paddock.sim.play_agents.base import TrainingAgent


def generate_baseline(
    registry: ContentRegistry,
    num_runs: int = 1_000,
    base_seed: int = 42,
    agent_class: type[TrainingAgent] = HeuristicAgent,
    parallel: bool = False,
) -> CareerBaseline:
    """Run batch careers and compute a full baseline.

    Parameters
    ----------
    registry:
        ContentRegistry with the training table and schedules loaded.
    num_runs:
        Number of careers to simulate.
    base_seed:
        Starting seed for reproducible runs.
    agent_class:
        Agent that plays every career.
    """
    runner = BatchCareerRunner(registry, agent_class=agent_class)
    results = runner.run_batch(num_runs, base_seed=base_seed, parallel=parallel)

    global_metrics = compute_global_metrics(results)

    return CareerBaseline(
        agent=agent_class.__name__,
        num_runs=num_runs,
        generated_at=datetime.now(timezone.utc).isoformat(),
        global_metrics=global_metrics,
        training_metrics=compute_training_metrics(
            results, global_metrics.avg_wins_per_career,
        ),
        race_metrics=compute_race_metrics(results),
    )


def save_baseline(baseline: CareerBaseline, path: Path) -> None:
    """Save baseline to JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(baseline.model_dump(), indent=2))


def load_baseline(path: Path) -> CareerBaseline:
    """Load baseline from JSON file."""
    data = json.loads(path.read_text())
    return CareerBaseline.model_validate(data)
