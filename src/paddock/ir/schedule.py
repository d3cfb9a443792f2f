"""Race schedule definitions -- which milestone turns carry a race."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class RaceKind(str, Enum):
    """Distance category of a scheduled race."""

    SPRINT = "SPRINT"
    MILE = "MILE"
    MEDIUM = "MEDIUM"
    LONG = "LONG"


class Surface(str, Enum):
    DIRT = "DIRT"
    TURF = "TURF"


class RaceEntry(BaseModel):
    """A single scheduled race.  Immutable once loaded."""

    model_config = {"frozen": True}

    turn: int = Field(ge=1)
    """Turn on which the race fires."""

    name: str
    kind: RaceKind
    surface: Surface
    distance: int = Field(gt=0)
    """Race distance in metres."""

    description: str = ""


class ScheduleDefinition(BaseModel):
    """A complete career schedule.

    Invariants (strictly increasing turns, required kinds present) are
    *not* enforced here; :meth:`Timeline.validate` reports them by name so
    setup mistakes surface as readable issues rather than load failures.
    """

    model_config = {"frozen": True}

    id: str
    final_turn: int = Field(ge=1)
    """Last playable turn of the career."""

    required_kinds: tuple[RaceKind, ...] = ()
    races: tuple[RaceEntry, ...]
