"""Random training agent -- picks an affordable training uniformly at random.

The ``RandomAgent`` is the simplest possible agent.  It is the baseline
for batch runs: it exercises the whole turn/race loop end-to-end and
gives a lower bound on what a schedule and training table allow.

Behaviour:
    - Each turn it picks uniformly among the affordable trainings.
    - With ``rest_bias`` it rests instead whenever the character is
      exhausted.
    - Race strategy is a uniform pick.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from paddock.ir.training import TrainingType
from paddock.sim.core.rng import CareerRNG
from paddock.sim.play_agents.base import TrainingAgent

if TYPE_CHECKING:
    from paddock.ir.schedule import RaceEntry
    from paddock.sim.core.entities import Character
    from paddock.sim.telemetry import UpcomingRace

STRATEGY_CHOICES: tuple[str, ...] = ("FRONT", "MID", "LATE")


class RandomAgent(TrainingAgent):
    """Agent that trains at random.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, a default
        ``CareerRNG(seed=0)`` is created.
    rest_bias:
        Always rest when the character is exhausted.
    """

    def __init__(
        self,
        rng: CareerRNG | None = None,
        rest_bias: bool = False,
    ) -> None:
        self._rng = rng or CareerRNG(seed=0)
        self._rest_bias = rest_bias

    def choose_training(
        self,
        character: Character,
        upcoming: UpcomingRace | None,
        affordable: list[TrainingType],
    ) -> TrainingType:
        if self._rest_bias and character.is_exhausted:
            return TrainingType.REST
        return self._rng.random_choice(affordable)

    def choose_strategy(self, character: Character, race: RaceEntry) -> str:
        return self._rng.random_choice(STRATEGY_CHOICES)
