"""Core simulation primitives for the career simulator."""

from paddock.sim.core.entities import (
    Career,
    Character,
    Condition,
    Profile,
    RaceRecord,
    Stats,
)
from paddock.sim.core.rng import CareerRNG

__all__ = [
    # rng
    "CareerRNG",
    # entities
    "Profile",
    "Stats",
    "Condition",
    "Career",
    "RaceRecord",
    "Character",
]
