"""Timeline -- static lookup of which turns carry a scheduled race.

The timeline is the single source of truth for race scheduling.  It holds
no mutable state beyond its configured schedule, and every query is a
pure lookup, so there are no failure modes at query time.
"""

from __future__ import annotations

from typing import Any

from paddock.ir.schedule import RaceEntry, ScheduleDefinition
from paddock.sim.telemetry import UpcomingRace


class Timeline:
    """Ordered, immutable race schedule with turn-based queries.

    Parameters
    ----------
    schedule:
        The schedule definition, normally from
        :meth:`ContentRegistry.get_schedule`.
    """

    def __init__(self, schedule: ScheduleDefinition) -> None:
        self._schedule = schedule
        self._races: tuple[RaceEntry, ...] = schedule.races
        self._by_turn: dict[int, RaceEntry] = {}
        for race in self._races:
            # First entry wins on duplicate turns; validate() reports it.
            self._by_turn.setdefault(race.turn, race)

    # -- properties ----------------------------------------------------------

    @property
    def schedule_id(self) -> str:
        return self._schedule.id

    @property
    def final_turn(self) -> int:
        """Last playable turn; the career is complete once past it."""
        return self._schedule.final_turn

    @property
    def races(self) -> tuple[RaceEntry, ...]:
        return self._races

    @property
    def total_races(self) -> int:
        return len(self._races)

    # -- lookups -------------------------------------------------------------

    def race_for_turn(self, turn: int) -> RaceEntry | None:
        """Return the race scheduled on *turn*, or ``None``."""
        return self._by_turn.get(turn)

    def is_race_turn(self, turn: int) -> bool:
        return turn in self._by_turn

    def race_number(self, turn: int) -> int:
        """1-based position of the race on *turn* within the schedule.

        Returns 0 when no race is scheduled on *turn*.
        """
        for index, race in enumerate(self._races):
            if race.turn == turn:
                return index + 1
        return 0

    def next_race(self, current_turn: int) -> UpcomingRace | None:
        """The nearest race strictly after *current_turn*."""
        for race in self._races:
            if race.turn > current_turn:
                turns_until = race.turn - current_turn
                return UpcomingRace(
                    race=race,
                    turns_until=turns_until,
                    is_next=turns_until == 1,
                )
        return None

    def races_after(self, turn: int) -> list[RaceEntry]:
        return [r for r in self._races if r.turn > turn]

    def summary(self) -> list[dict[str, Any]]:
        return [race.model_dump(mode="json") for race in self._races]

    # -- validation ----------------------------------------------------------

    def validate(self) -> list[str]:
        """List every violated schedule invariant by name.

        Never raises.  An empty list means the schedule is sound.
        """
        issues: list[str] = []
        turns = [r.turn for r in self._races]

        if not turns:
            issues.append("Schedule has no races")

        if len(turns) != len(set(turns)):
            issues.append("Duplicate race turns found")

        if any(b <= a for a, b in zip(turns, turns[1:])):
            issues.append("Races not in strictly increasing turn order")

        kinds = {r.kind for r in self._races}
        missing = [k.value for k in self._schedule.required_kinds if k not in kinds]
        if missing:
            issues.append(f"Missing race types: {', '.join(missing)}")

        late = [r.name for r in self._races if r.turn > self.final_turn]
        if late:
            issues.append(
                f"Races scheduled after final turn {self.final_turn}: {', '.join(late)}"
            )

        return issues

    def __repr__(self) -> str:
        return (
            f"Timeline(id={self.schedule_id!r}, races={self.total_races}, "
            f"final_turn={self.final_turn})"
        )
