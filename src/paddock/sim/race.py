"""Race outcome simulators.

The career engine only consumes a finishing order; how that order is
computed is a pluggable collaborator.  Two implementations ship here:

- :class:`StatTotalRaceSimulator` ranks runners by stat total plus seeded
  noise.  It is a stand-in so the launcher and batch runs have something
  to call, not a model of race physics.
- :class:`ScriptedRaceSimulator` always places the player at a fixed
  position (the tutorial's scripted win).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

from paddock.sim.telemetry import RaceOutcome

if TYPE_CHECKING:
    from paddock.ir.schedule import RaceEntry
    from paddock.sim.core.entities import Character
    from paddock.sim.core.rng import CareerRNG

DEFAULT_RIVALS: tuple[str, ...] = (
    "Midnight Comet",
    "Iron Duchess",
    "Copper Gale",
    "Sable Regent",
    "Harbor Lights",
    "Quiet Storm",
    "Velvet Arrow",
)


class RaceSimulator(ABC):
    """Base class for anything that can decide a race's finishing order."""

    @abstractmethod
    def run(
        self,
        character: Character,
        race: RaceEntry,
        strategy: str | None,
        rng: CareerRNG,
    ) -> RaceOutcome:
        """Run *race* with *character* in the field.

        Parameters
        ----------
        character:
            The player's character.  Must not be mutated.
        race:
            The scheduled race being run.
        strategy:
            Racing strategy chosen on the lineup screen (``"FRONT"``,
            ``"MID"``, ``"LATE"``) or ``None``.
        rng:
            Random source for any noise in the outcome.
        """


class StatTotalRaceSimulator(RaceSimulator):
    """Ranks the field by stat total plus a bounded random swing.

    Parameters
    ----------
    rivals:
        Names of the other runners.
    spread:
        Rivals' stat totals are drawn within ``+/- spread`` of the player's.
    noise:
        Every runner's score gets ``[0, noise]`` added on race day.
    """

    def __init__(
        self,
        rivals: Sequence[str] = DEFAULT_RIVALS,
        spread: int = 25,
        noise: int = 30,
    ) -> None:
        self.rivals = tuple(rivals)
        self.spread = spread
        self.noise = noise

    def run(
        self,
        character: Character,
        race: RaceEntry,
        strategy: str | None,
        rng: CareerRNG,
    ) -> RaceOutcome:
        total = character.stat_total
        scores: list[tuple[int, str, bool]] = [
            (total + rng.random_int(0, self.noise), character.name, True),
        ]
        for rival in self.rivals:
            rating = total + rng.random_int(-self.spread, self.spread)
            scores.append((rating + rng.random_int(0, self.noise), rival, False))

        # Stable sort: the player keeps the inside line on a dead heat.
        scores.sort(key=lambda item: item[0], reverse=True)
        position = next(i for i, item in enumerate(scores) if item[2]) + 1
        return RaceOutcome(
            race=race.name,
            finishing_order=[name for _, name, _ in scores],
            player_position=position,
            strategy=strategy,
        )


class ScriptedRaceSimulator(RaceSimulator):
    """Places the player at a fixed *position* every time."""

    def __init__(
        self,
        position: int = 1,
        rivals: Sequence[str] = DEFAULT_RIVALS[:2],
    ) -> None:
        if not 1 <= position <= len(rivals) + 1:
            raise ValueError(
                f"position must be within 1..{len(rivals) + 1}, got {position}"
            )
        self.position = position
        self.rivals = tuple(rivals)

    def run(
        self,
        character: Character,
        race: RaceEntry,
        strategy: str | None,
        rng: CareerRNG,
    ) -> RaceOutcome:
        order = list(self.rivals)
        order.insert(self.position - 1, character.name)
        return RaceOutcome(
            race=race.name,
            finishing_order=order,
            player_position=self.position,
            strategy=strategy,
        )
