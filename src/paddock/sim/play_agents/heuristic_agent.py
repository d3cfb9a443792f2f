"""Heuristic training agent that plans around the race schedule.

The ``HeuristicAgent`` is a hand-crafted policy using a priority
waterfall each turn:

- **Recover** when energy cannot cover the cheapest stat training, or
  when the next race is one turn away and energy is low.
- **Fix form** with a media day when form is Tired or Bad.
- **Train** the weakest of the stats the next race rewards.
- **Strategy**: front-run on a speed build, close late on a stamina
  build, sit mid-pack otherwise.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from paddock.ir.schedule import RaceKind
from paddock.ir.training import Form, StatName, TrainingType
from paddock.sim.core.entities import STAT_MAX
from paddock.sim.play_agents.base import TrainingAgent

if TYPE_CHECKING:
    from paddock.ir.schedule import RaceEntry
    from paddock.sim.core.entities import Character
    from paddock.sim.telemetry import UpcomingRace

# Stats each race kind rewards, in priority order
_RACE_FOCUS: dict[RaceKind, tuple[StatName, ...]] = {
    RaceKind.SPRINT: (StatName.SPEED, StatName.POWER),
    RaceKind.MILE: (StatName.SPEED, StatName.STAMINA, StatName.POWER),
    RaceKind.MEDIUM: (StatName.STAMINA, StatName.POWER),
    RaceKind.LONG: (StatName.STAMINA, StatName.SPEED),
}

_STAT_TRAINING: dict[StatName, TrainingType] = {
    StatName.SPEED: TrainingType.SPEED,
    StatName.STAMINA: TrainingType.STAMINA,
    StatName.POWER: TrainingType.POWER,
}

_POOR_FORMS = frozenset({Form.BAD, Form.TIRED})


class HeuristicAgent(TrainingAgent):
    """Agent that uses schedule knowledge to train well.

    Parameters
    ----------
    pre_race_energy:
        Rest before a race that is one turn away if energy is below this.
    **kwargs:
        Absorbs extra kwargs (e.g. ``rng=``) from BatchCareerRunner.
    """

    def __init__(self, pre_race_energy: int = 50, **kwargs: Any) -> None:
        self.pre_race_energy = pre_race_energy

    # ==================================================================
    # TrainingAgent interface
    # ==================================================================

    def choose_training(
        self,
        character: Character,
        upcoming: UpcomingRace | None,
        affordable: list[TrainingType],
    ) -> TrainingType:
        stat_options = [t for t in affordable if t in _STAT_TRAINING.values()]
        energy = character.condition.energy

        # --- Priority 1: Nothing to train with ---
        if not stat_options:
            return TrainingType.REST

        # --- Priority 2: Top up before race day ---
        if upcoming is not None and upcoming.is_next and energy < self.pre_race_energy:
            return TrainingType.REST

        # --- Priority 3: Recover form ---
        if character.condition.form in _POOR_FORMS and TrainingType.MEDIA in affordable:
            return TrainingType.MEDIA

        # --- Priority 4: Weakest stat the next race cares about ---
        focus = _RACE_FOCUS[upcoming.race.kind] if upcoming else tuple(StatName)
        candidates = [
            stat for stat in focus
            if _STAT_TRAINING[stat] in stat_options
            and character.stats.get(stat) < STAT_MAX
        ]
        if candidates:
            weakest = min(candidates, key=character.stats.get)
            return _STAT_TRAINING[weakest]

        # --- Priority 5: Anything still improvable ---
        for stat in sorted(StatName, key=character.stats.get):
            if _STAT_TRAINING[stat] in stat_options and character.stats.get(stat) < STAT_MAX:
                return _STAT_TRAINING[stat]

        return TrainingType.REST

    def choose_strategy(self, character: Character, race: RaceEntry) -> str:
        stats = character.stats
        if stats.speed > max(stats.stamina, stats.power):
            return "FRONT"
        if stats.stamina > max(stats.speed, stats.power):
            return "LATE"
        return "MID"
