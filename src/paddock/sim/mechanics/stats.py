"""Stat and form mechanics -- bounded stat gains and form improvement rolls."""

from __future__ import annotations

from typing import TYPE_CHECKING

from paddock.sim.mechanics.energy import clamp

if TYPE_CHECKING:
    from paddock.ir.training import Form, FormDefinition, StatName
    from paddock.sim.core.entities import Character
    from paddock.sim.core.rng import CareerRNG


def raise_stat(character: Character, stat: StatName, amount: int) -> int:
    """Add *amount* to *stat*, capped at 100.

    Returns the gain actually applied (0 once the stat is maxed).
    """
    before = character.stats.get(stat)
    after = clamp(before + amount)
    setattr(character.stats, stat.value, after)
    return after - before


def roll_form_improvement(
    character: Character,
    form_def: FormDefinition,
    chance: float,
    rng: CareerRNG,
) -> Form | None:
    """Maybe move the character one rung up the form ladder.

    With probability *chance* the character's form is replaced by a
    random entry from ``form_def.improves_to``.  Returns the new form, or
    ``None`` if nothing changed (failed roll, or already at the top).
    """
    if not form_def.improves_to:
        return None
    if not rng.chance(chance):
        return None
    new_form = rng.random_choice(form_def.improves_to)
    character.condition.form = new_form
    return new_form
