"""Base class for agents that play a career without a human.

All training agents must subclass ``TrainingAgent`` and implement the two
abstract methods.  The career runner calls these at decision points: once
per turn to pick a training, and once per race to pick a strategy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from paddock.ir.schedule import RaceEntry
    from paddock.ir.training import TrainingType
    from paddock.sim.core.entities import Character
    from paddock.sim.telemetry import UpcomingRace


class TrainingAgent(ABC):
    """Base class for agents that play through a career."""

    @abstractmethod
    def choose_training(
        self,
        character: Character,
        upcoming: UpcomingRace | None,
        affordable: list[TrainingType],
    ) -> TrainingType:
        """Choose this turn's training.

        Parameters
        ----------
        character:
            The character being trained.  Must not be mutated.
        upcoming:
            The next scheduled race, or ``None`` after the last one.
        affordable:
            Training types the character can currently pay for.  Never
            empty: recovery actions cost nothing.

        Returns
        -------
        TrainingType
            One of *affordable*.
        """

    @abstractmethod
    def choose_strategy(self, character: Character, race: RaceEntry) -> str:
        """Choose a racing strategy (``"FRONT"``, ``"MID"`` or ``"LATE"``)."""
