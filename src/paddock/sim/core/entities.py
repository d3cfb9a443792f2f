"""Character record for the career simulator.

The character is the only long-lived mutable entity in a session.  All
data classes use Pydantic v2 BaseModel for validation and serialization,
so a snapshot is just ``model_dump`` and a restore is ``model_validate``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from paddock.errors import InvalidCharacterName
from paddock.ir.training import Form, StatName
from paddock.sim.core.rng import CareerRNG

STAT_MIN = 0
STAT_MAX = 100
DEFAULT_STAT = 20
EXHAUSTED_BELOW = 20


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

class Profile(BaseModel):
    """Identity.  Frozen: the name never changes after setup."""

    model_config = {"frozen": True}

    name: str
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Character name must be a non-empty string")
        return value


class Stats(BaseModel):
    """The three trainable stats, each bounded to [0, 100]."""

    speed: int = Field(default=DEFAULT_STAT, ge=STAT_MIN, le=STAT_MAX)
    stamina: int = Field(default=DEFAULT_STAT, ge=STAT_MIN, le=STAT_MAX)
    power: int = Field(default=DEFAULT_STAT, ge=STAT_MIN, le=STAT_MAX)

    def get(self, stat: StatName) -> int:
        return getattr(self, stat.value)

    @property
    def total(self) -> int:
        return self.speed + self.stamina + self.power


class Condition(BaseModel):
    energy: int = Field(default=100, ge=STAT_MIN, le=STAT_MAX)
    form: Form = Form.NORMAL


class Career(BaseModel):
    turn: int = Field(default=1, ge=1)
    """Current turn.  Only ever advanced by the turn controller."""

    races_run: int = 0
    races_won: int = 0


class RaceRecord(BaseModel):
    """One finished race in the character's history."""

    race: str
    turn: int
    position: int
    field_size: int
    strategy: str | None = None

    @property
    def won(self) -> bool:
        return self.position == 1


# ---------------------------------------------------------------------------
# Character
# ---------------------------------------------------------------------------

class Character(BaseModel):
    """A trainable racer: identity, stats, condition and career clock."""

    profile: Profile
    stats: Stats = Field(default_factory=Stats)
    condition: Condition = Field(default_factory=Condition)
    career: Career = Field(default_factory=Career)
    race_history: list[RaceRecord] = Field(default_factory=list)

    # -- construction --------------------------------------------------------

    @classmethod
    def create(
        cls,
        name: str,
        stats: dict[str, int] | None = None,
        rng: CareerRNG | None = None,
    ) -> Character:
        """Build a fresh character at turn 1 with full energy.

        Explicit *stats* win.  Otherwise, when an *rng* is supplied each
        stat is drawn from ``[15, 25]``; with neither, every stat is 20.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidCharacterName(str(name))

        if stats is not None:
            start = Stats(**stats)
        elif rng is not None:
            start = Stats(
                speed=rng.random_int(DEFAULT_STAT - 5, DEFAULT_STAT + 5),
                stamina=rng.random_int(DEFAULT_STAT - 5, DEFAULT_STAT + 5),
                power=rng.random_int(DEFAULT_STAT - 5, DEFAULT_STAT + 5),
            )
        else:
            start = Stats()
        return cls(profile=Profile(name=name), stats=start)

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> Character:
        """Restore a character from a :meth:`to_data` snapshot."""
        return cls.model_validate(data)

    def to_data(self) -> dict[str, Any]:
        """JSON-safe deep copy of the record."""
        return self.model_dump(mode="json")

    # -- queries -------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def stat_total(self) -> int:
        return self.stats.total

    @property
    def is_exhausted(self) -> bool:
        return self.condition.energy < EXHAUSTED_BELOW

    def can_train(self, energy_cost: int) -> bool:
        """Whether the character can afford *energy_cost*.

        Negative costs are never affordable.
        """
        if energy_cost < 0:
            return False
        return self.condition.energy >= energy_cost

    def summary(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "turn": self.career.turn,
            "total_stats": self.stat_total,
            "energy": self.condition.energy,
            "form": self.condition.form.value,
            "races_completed": self.career.races_run,
            "wins": self.career.races_won,
        }
