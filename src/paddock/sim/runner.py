"""Career simulation runner -- plays whole careers with a training agent.

Provides two classes:

- **CareerRunner**: fast-forwards a single career to completion with one
  agent, producing :class:`CareerTelemetry`.
- **BatchCareerRunner**: orchestrates many careers (optionally in
  parallel) for balance analysis.

Careers are driven through :class:`CareerSession`, the same object the
interactive game uses, so batch results exercise the real turn and race
logic rather than a copy of it.
"""

from __future__ import annotations

import logging
import multiprocessing
from typing import TYPE_CHECKING

from paddock.errors import PaddockError
from paddock.ir.training import TrainingType
from paddock.session.career import CareerSession
from paddock.sim.core.rng import CareerRNG
from paddock.sim.play_agents.base import TrainingAgent
from paddock.sim.play_agents.random_agent import RandomAgent
from paddock.sim.telemetry import CareerTelemetry

if TYPE_CHECKING:
    from paddock.sim.content.registry import ContentRegistry
    from paddock.sim.race import RaceSimulator

logger = logging.getLogger(__name__)

# Safety valve; a career is normally final_turn turns long.
_MAX_DECISIONS = 200


# =====================================================================
# CareerRunner
# =====================================================================

class CareerRunner:
    """Plays one career at a time with a fixed agent.

    Parameters
    ----------
    registry:
        Loaded content.
    agent:
        Decides every training and race strategy.
    race_simulator:
        Career race simulator; defaults to the session's.
    """

    def __init__(
        self,
        registry: ContentRegistry,
        agent: TrainingAgent,
        race_simulator: RaceSimulator | None = None,
    ) -> None:
        self.registry = registry
        self.agent = agent
        self.race_simulator = race_simulator

    def run_career(self, seed: int, name: str = "Runner") -> CareerTelemetry:
        """Play a full career with master seed *seed*."""
        session = CareerSession(
            self.registry, seed=seed, race_simulator=self.race_simulator,
        )
        character = session.create_character(name, randomize=True)
        controller = session.active_controller
        engine = controller.engine
        telemetry = CareerTelemetry(seed=seed)

        for _ in range(_MAX_DECISIONS):
            if session.pending_race is not None:
                strategy = self.agent.choose_strategy(character, session.pending_race)
                telemetry.races.append(session.run_race(strategy))
                continue
            if session.is_career_complete:
                break

            affordable = [
                t for t in engine.available_actions()
                if engine.validate(character, t) is None
            ]
            choice = self.agent.choose_training(
                character, controller.upcoming_race(), affordable,
            )
            try:
                session.train(choice)
            except PaddockError as exc:
                logger.debug("Seed %d: %s rejected (%s)", seed, choice, exc)
                telemetry.failed_actions += 1
                # Resting costs nothing, so the clock always moves.
                choice = TrainingType.REST
                session.train(choice)
            telemetry.actions.append(TrainingType(choice).value)
            telemetry.turns_played += 1
        else:
            logger.warning("Seed %d: career did not finish in %d decisions", seed, _MAX_DECISIONS)

        telemetry.final_stats = character.stats.model_dump()
        telemetry.final_energy = character.condition.energy
        return telemetry


# =====================================================================
# Batch runner
# =====================================================================

def _make_agent(agent_class: type[TrainingAgent], seed: int) -> TrainingAgent:
    agent_rng = CareerRNG(seed).fork("agent")
    return agent_class(rng=agent_rng)  # type: ignore[call-arg]


def _worker_run_single(args: tuple) -> CareerTelemetry:
    """Top-level worker function for multiprocessing (must be picklable)."""
    training_path, schedules_path, agent_class, seed = args

    from paddock.sim.content.registry import ContentRegistry

    registry = ContentRegistry()
    registry.load_training_table(training_path)
    registry.load_schedules(schedules_path)

    runner = CareerRunner(registry, _make_agent(agent_class, seed))
    return runner.run_career(seed)


class BatchCareerRunner:
    """Runs many careers, optionally in parallel."""

    def __init__(
        self,
        registry: ContentRegistry,
        agent_class: type[TrainingAgent] = RandomAgent,
    ) -> None:
        self.registry = registry
        self.agent_class = agent_class

    def run_batch(
        self,
        n_runs: int,
        base_seed: int = 42,
        parallel: bool = False,
    ) -> list[CareerTelemetry]:
        """Run *n_runs* careers with seeds ``base_seed .. base_seed + n_runs - 1``."""
        seeds = [base_seed + i for i in range(n_runs)]

        if parallel and n_runs > 1:
            return self._run_parallel(seeds)
        return self._run_sequential(seeds)

    def _run_sequential(self, seeds: list[int]) -> list[CareerTelemetry]:
        results: list[CareerTelemetry] = []
        for seed in seeds:
            runner = CareerRunner(self.registry, _make_agent(self.agent_class, seed))
            results.append(runner.run_career(seed))
        return results

    def _run_parallel(self, seeds: list[int]) -> list[CareerTelemetry]:
        """Run careers in parallel using multiprocessing.

        Rather than pickling the registry, we pass file paths and reload
        in each worker process.
        """
        from paddock.sim.content.registry import (
            _DEFAULT_SCHEDULES_PATH,
            _DEFAULT_TRAINING_PATH,
        )

        work_items = [
            (str(_DEFAULT_TRAINING_PATH), str(_DEFAULT_SCHEDULES_PATH), self.agent_class, seed)
            for seed in seeds
        ]

        n_workers = min(len(seeds), multiprocessing.cpu_count() or 1)

        with multiprocessing.Pool(processes=n_workers) as pool:
            results = pool.map(_worker_run_single, work_items)

        return results
