"""CareerSession -- everything one player's session owns.

The session holds the single mutable character and the engine objects
built around it (training engine, turn controller, timeline), plus the
race simulator and save store.  Navigation never reaches in here
directly; the action bindings are the only caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from paddock.errors import NoActiveCharacter, NoPendingRace, RacePending
from paddock.sim.content.registry import CAREER_SCHEDULE, TUTORIAL_SCHEDULE
from paddock.sim.core.entities import Character, RaceRecord
from paddock.sim.core.rng import CareerRNG
from paddock.sim.race import RaceSimulator, ScriptedRaceSimulator, StatTotalRaceSimulator
from paddock.sim.timeline import Timeline
from paddock.sim.training import TrainingEngine
from paddock.sim.turns import TurnController
from paddock.session.store import MemorySessionStore, SessionStore

if TYPE_CHECKING:
    from paddock.ir.schedule import RaceEntry
    from paddock.ir.training import TrainingType
    from paddock.sim.content.registry import ContentRegistry
    from paddock.sim.telemetry import CareerProgress, RaceOutcome, TurnResult, UpcomingRace

logger = logging.getLogger(__name__)

TUTORIAL_CHARACTER = "Tutorial Star"
TUTORIAL_STATS = {"speed": 25, "stamina": 25, "power": 25}


class CareerSession:
    """Session-level operations over one character at a time.

    Parameters
    ----------
    registry:
        Loaded content (training table and schedules).
    store:
        Save-game store.  Defaults to an in-memory store.
    seed:
        Master seed.  Every sub-system draws from a named fork of it.
        ``None`` seeds from OS entropy.
    race_simulator:
        Decides finishing orders for career races.  The tutorial always
        uses a scripted win.
    """

    def __init__(
        self,
        registry: ContentRegistry,
        store: SessionStore | None = None,
        seed: int | None = None,
        race_simulator: RaceSimulator | None = None,
    ) -> None:
        self.registry = registry
        self.store = store or MemorySessionStore()
        self.rng = CareerRNG(seed) if seed is not None else CareerRNG.from_entropy()
        self.race_simulator = race_simulator or StatTotalRaceSimulator()
        self.tutorial_simulator: RaceSimulator = ScriptedRaceSimulator(position=1)

        self._careers_started = 0
        self._clear()

    def _clear(self) -> None:
        self.character: Character | None = None
        self.controller: TurnController | None = None
        self.is_tutorial = False
        self.pending_race: RaceEntry | None = None
        self.last_outcome: RaceOutcome | None = None
        self._race_rng: CareerRNG | None = None

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def create_character(self, name: str, randomize: bool = False) -> Character:
        """Start a new career for a character called *name*.

        Raises :class:`InvalidCharacterName` for a blank name; any
        current session is left as it was.
        """
        rng = self.rng.fork(f"character:{self._careers_started}") if randomize else None
        character = Character.create(name, rng=rng)
        self._start(character, CAREER_SCHEDULE, tutorial=False)
        logger.debug("New career for %s", character.name)
        return character

    def start_tutorial(self) -> Character:
        """Start the guided tutorial with its fixed character."""
        character = Character.create(TUTORIAL_CHARACTER, stats=TUTORIAL_STATS)
        self._start(character, TUTORIAL_SCHEDULE, tutorial=True)
        return character

    def reset(self) -> None:
        """Drop the current character and all per-career state."""
        self._clear()

    def _start(self, character: Character, schedule_id: str, tutorial: bool) -> None:
        timeline = Timeline(self.registry.get_schedule(schedule_id))
        stream = self._careers_started
        self._careers_started += 1

        engine = TrainingEngine(
            self.registry.training_table,
            rng=self.rng.fork(f"training:{stream}"),
            deterministic=tutorial,
        )
        self._clear()
        self.character = character
        self.controller = TurnController(character, timeline, engine)
        self.is_tutorial = tutorial
        self._race_rng = self.rng.fork(f"race:{stream}")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def has_character(self) -> bool:
        return self.character is not None

    @property
    def active_character(self) -> Character:
        if self.character is None:
            raise NoActiveCharacter()
        return self.character

    @property
    def active_controller(self) -> TurnController:
        if self.controller is None:
            raise NoActiveCharacter()
        return self.controller

    @property
    def timeline(self) -> Timeline:
        return self.active_controller.timeline

    @property
    def is_career_complete(self) -> bool:
        """Past the final turn, or every scheduled race has been run."""
        controller = self.active_controller
        if controller.is_career_complete:
            return True
        return len(self.active_character.race_history) >= controller.timeline.total_races

    # ------------------------------------------------------------------
    # Turns and races
    # ------------------------------------------------------------------

    def train(self, training_type: TrainingType | str) -> TurnResult:
        """Spend one turn on *training_type*.

        A race on the turn just entered becomes :attr:`pending_race` until
        :meth:`run_race` is called.
        """
        if self.pending_race is not None:
            raise RacePending(self.pending_race.name)
        result = self.active_controller.process_turn(training_type)
        if result.race is not None:
            self.pending_race = result.race
        return result

    def run_race(self, strategy: str | None = None) -> RaceOutcome:
        """Run the pending race and record the result on the character.

        Raises :class:`NoPendingRace` if no race is waiting.
        """
        character = self.active_character
        race = self.pending_race
        if race is None:
            raise NoPendingRace(character.career.turn)

        simulator = self.tutorial_simulator if self.is_tutorial else self.race_simulator
        rng = self._race_rng or self.rng.fork("race")
        outcome = simulator.run(character, race, strategy, rng)

        character.race_history.append(RaceRecord(
            race=race.name,
            turn=race.turn,
            position=outcome.player_position,
            field_size=outcome.field_size,
            strategy=strategy,
        ))
        character.career.races_run += 1
        if outcome.won:
            character.career.races_won += 1

        self.pending_race = None
        self.last_outcome = outcome
        logger.debug(
            "%s finished %d/%d in %s",
            character.name, outcome.player_position, outcome.field_size, race.name,
        )
        return outcome

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> dict[str, Any]:
        character = self.active_character
        return self.store.save({
            "character": character.to_data(),
            "schedule_id": self.timeline.schedule_id,
            "seed": self.rng.seed,
        })

    def load(self, ref: str) -> dict[str, Any]:
        """Restore a saved career.  On failure the session is unchanged."""
        result = self.store.load(ref)
        if not result["success"]:
            return result
        character = Character.from_data(result["character"])
        self._start(character, result.get("schedule_id") or CAREER_SCHEDULE, tutorial=False)
        logger.debug("Loaded %s at turn %d", character.name, character.career.turn)
        return result

    def latest_save(self) -> str | None:
        saves = self.store.list_saves()
        return saves[-1] if saves else None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def upcoming_race(self) -> UpcomingRace | None:
        return self.active_controller.upcoming_race()

    def recommendations(self) -> list[str]:
        return self.active_controller.recommendations()

    def progress(self) -> CareerProgress:
        return self.active_controller.progress()
