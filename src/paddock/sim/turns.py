"""TurnController -- turn progression and race triggering.

Orchestrates exactly one turn at a time:

1. validate and apply the requested training (via :class:`TrainingEngine`);
2. advance the career clock by exactly one turn;
3. ask the :class:`Timeline` whether the turn just entered has a race;
4. report everything in a :class:`TurnResult`.

Turn advancement and race detection are inseparable: a race can only be
detected on the turn that was just entered, never retroactively, and
never on a turn that failed validation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from paddock.errors import PaddockError
from paddock.ir.schedule import RaceKind
from paddock.ir.training import TrainingType
from paddock.sim.telemetry import CareerProgress, TurnResult, UpcomingRace

if TYPE_CHECKING:
    from paddock.ir.schedule import RaceEntry
    from paddock.sim.core.entities import Character
    from paddock.sim.timeline import Timeline
    from paddock.sim.training import TrainingEngine

logger = logging.getLogger(__name__)

_RACE_APPROACH_ADVICE: dict[RaceKind, str] = {
    RaceKind.SPRINT: "Sprint race approaching - focus on Speed and Power training",
    RaceKind.MILE: "Mile race approaching - balance all stats",
    RaceKind.MEDIUM: "Medium race approaching - build Stamina without neglecting Power",
    RaceKind.LONG: "Long race approaching - prioritize Stamina training",
}


class TurnController:
    """Drives one character through its career, one turn at a time.

    Parameters
    ----------
    character:
        The character whose career clock this controller advances.
    timeline:
        Race schedule queried after every accepted turn.
    engine:
        Training engine that validates and applies each action.
    """

    def __init__(
        self,
        character: Character,
        timeline: Timeline,
        engine: TrainingEngine,
    ) -> None:
        self.character = character
        self.timeline = timeline
        self.engine = engine

    # ------------------------------------------------------------------
    # Turn processing
    # ------------------------------------------------------------------

    def process_turn(self, training_type: TrainingType | str) -> TurnResult:
        """Process one complete turn: train, advance, check the schedule.

        Raises the engine's :class:`InvalidActionKind` or
        :class:`InsufficientEnergy` unchanged; on either, the turn counter
        and the character are exactly as they were.
        """
        gains = self.engine.apply_training(self.character, training_type)
        config = self.engine.config(training_type)

        previous_turn = self.character.career.turn
        self.character.career.turn = previous_turn + 1
        new_turn = self.character.career.turn

        result = TurnResult(
            success=True,
            action=config.type,
            previous_turn=previous_turn,
            new_turn=new_turn,
            gains=gains,
            total_races=self.timeline.total_races,
            career_complete=new_turn > self.timeline.final_turn,
        )

        race = self.timeline.race_for_turn(new_turn)
        if race is not None:
            number = self.timeline.race_number(new_turn)
            result.race = race
            result.race_number = number
            result.is_first_race = number == 1
            result.is_final_race = number == self.timeline.total_races
            result.message = f"Training complete! {race.name} starts now!"
            logger.debug("Turn %d: race %r triggered", new_turn, race.name)
        else:
            result.message = f"Training complete! Turn {new_turn} begins."

        return result

    def simulate(self, actions: Iterable[TrainingType | str]) -> list[TurnResult]:
        """Apply *actions* in order, stopping early on the first failure or
        once the career clock passes the final turn.

        A failure is recorded as a ``success=False`` result carrying the
        error message; it is always the last entry.
        """
        results: list[TurnResult] = []
        for action in actions:
            turn = self.character.career.turn
            try:
                results.append(self.process_turn(action))
            except PaddockError as exc:
                results.append(TurnResult(
                    success=False,
                    action=None,
                    previous_turn=turn,
                    new_turn=turn,
                    error=str(exc),
                ))
                break
            if self.is_career_complete:
                break
        return results

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_career_complete(self) -> bool:
        return self.character.career.turn > self.timeline.final_turn

    def upcoming_race(self) -> UpcomingRace | None:
        return self.timeline.next_race(self.character.career.turn)

    def current_race(self) -> RaceEntry | None:
        """The race scheduled on the current turn, if any."""
        return self.timeline.race_for_turn(self.character.career.turn)

    def recommendations(self) -> list[str]:
        """Engine advice plus warnings about the next race."""
        advice = self.engine.recommendations(self.character)

        upcoming = self.upcoming_race()
        if upcoming is not None and upcoming.turns_until <= 2:
            advice.append(_RACE_APPROACH_ADVICE[upcoming.race.kind])
            if upcoming.is_next:
                advice.append("Race is NEXT - consider rest to ensure good energy")

        return advice

    def progress(self) -> CareerProgress:
        turn = self.character.career.turn
        completed = [r for r in self.timeline.races if r.turn < turn]
        remaining = [r for r in self.timeline.races if r.turn >= turn]
        return CareerProgress(
            current_turn=turn,
            total_turns=self.timeline.final_turn,
            races_completed=len(completed),
            total_races=self.timeline.total_races,
            races_remaining=len(remaining),
            next_race=remaining[0] if remaining else None,
            is_career_complete=self.is_career_complete,
        )

    def validate(self) -> list[str]:
        """Setup problems that would break turn progression."""
        return self.timeline.validate()
