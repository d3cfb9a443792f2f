"""Energy system -- clamp, spend, and gain.

Career energy rules:
    - A character starts a career with 100 energy.
    - Stat training spends its cost from the energy pool.
    - Recovery actions (rest, media) restore energy.
    - Energy is always an integer in [0, 100]; there is no overflow and
      no debt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from paddock.sim.core.entities import Character

ENERGY_MIN = 0
ENERGY_MAX = 100


def clamp(value: int, low: int = ENERGY_MIN, high: int = ENERGY_MAX) -> int:
    """Clamp *value* into ``[low, high]``."""
    return max(low, min(high, value))


def spend_energy(character: Character, amount: int) -> int:
    """Spend *amount* energy and return the (non-positive) delta applied.

    Affordability is checked by callers with :meth:`Character.can_train`
    before anything is spent.

    Parameters
    ----------
    character:
        The character whose pool is drained.
    amount:
        Energy cost to pay.
    """
    before = character.condition.energy
    character.condition.energy = clamp(before - amount)
    return character.condition.energy - before


def gain_energy(character: Character, amount: int) -> int:
    """Add energy to the character's pool, capped at 100.

    Returns the energy delta actually applied (0 when already full).
    """
    before = character.condition.energy
    character.condition.energy = clamp(before + amount)
    return character.condition.energy - before
