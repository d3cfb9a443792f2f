"""Result and telemetry data models for turns, races and whole careers.

These lightweight dataclasses are the transient values the engine hands
back to callers:

- **TrainingGains**: stat/energy deltas from one training session.
- **TurnResult**: everything a caller needs to know about one turn,
  including whether a scheduled race fires on the turn just entered.
- **UpcomingRace** / **CareerProgress**: read-only views for the UI.
- **RaceOutcome**: finishing order produced by a race simulator.
- **CareerTelemetry**: per-career statistics for batch runs.

All are plain ``dataclass`` instances (not Pydantic models) to keep the
hot path cheap during batch simulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from paddock.ir.schedule import RaceEntry
    from paddock.ir.training import Form, TrainingType


@dataclass
class TrainingGains:
    """Stat and energy deltas for one training session.

    From ``calculate_gains`` these are the *intended* deltas; from
    ``apply_training`` they are what actually landed after clamping.

    Attributes
    ----------
    energy:
        Signed energy delta (negative for stat training, positive for
        recovery).
    energy_cost:
        The configured cost of the action, independent of clamping.
    form:
        The new form if an improvement roll succeeded, else ``None``.
    """

    speed: int = 0
    stamina: int = 0
    power: int = 0
    energy: int = 0
    energy_cost: int = 0
    form: Form | None = None

    @property
    def stat_total(self) -> int:
        return self.speed + self.stamina + self.power


@dataclass
class TurnResult:
    """Outcome of one call to :meth:`TurnController.process_turn`.

    This is the only channel through which callers learn that a race
    starts now: ``race`` is populated exactly when the turn just entered
    has a scheduled entry.
    """

    success: bool
    action: TrainingType | None
    previous_turn: int
    new_turn: int
    gains: TrainingGains | None = None
    race: RaceEntry | None = None
    race_number: int = 0
    total_races: int = 0
    is_first_race: bool = False
    is_final_race: bool = False
    career_complete: bool = False
    message: str = ""
    error: str | None = None

    @property
    def race_triggered(self) -> bool:
        return self.race is not None


@dataclass
class UpcomingRace:
    """The nearest future race relative to some turn."""

    race: RaceEntry
    turns_until: int
    is_next: bool
    """True when the race is exactly one turn away."""


@dataclass
class CareerProgress:
    current_turn: int
    total_turns: int
    races_completed: int
    total_races: int
    races_remaining: int
    next_race: RaceEntry | None
    is_career_complete: bool


@dataclass
class RaceOutcome:
    """Finishing order for one race.

    Attributes
    ----------
    finishing_order:
        Runner names, winner first.  The player's character appears by name.
    player_position:
        1-based finishing position of the player's character.
    """

    race: str
    finishing_order: list[str]
    player_position: int
    strategy: str | None = None

    @property
    def field_size(self) -> int:
        return len(self.finishing_order)

    @property
    def won(self) -> bool:
        return self.player_position == 1


@dataclass
class CareerTelemetry:
    """Stats from one fast-forwarded career.

    Attributes
    ----------
    seed:
        The master RNG seed used for this career.
    actions:
        Training types chosen, in turn order.
    races:
        Ordered race outcomes.
    final_stats:
        ``{"speed": .., "stamina": .., "power": ..}`` at career end.
    turns_played:
        Number of turns successfully processed.
    failed_actions:
        Attempts rejected by the engine (e.g. insufficient energy).
    """

    seed: int
    actions: list[str] = field(default_factory=list)
    races: list[RaceOutcome] = field(default_factory=list)
    final_stats: dict[str, int] = field(default_factory=dict)
    final_energy: int = 0
    turns_played: int = 0
    failed_actions: int = 0

    @property
    def wins(self) -> int:
        return sum(1 for r in self.races if r.won)
