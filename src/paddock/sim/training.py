"""TrainingEngine -- training mechanics and stat calculations.

The engine is a calculator over the static training table:

- ``calculate_gains`` is pure and never mutates the character.
- ``apply_training`` validates first and then mutates; a failed
  validation leaves the character untouched.

All randomness (gain jitter, the form-improvement roll) comes from the
injected :class:`CareerRNG`.  An engine built with ``deterministic=True``
skips both, so scripted flows (the tutorial) get exact gains.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from paddock.errors import InsufficientEnergy, InvalidActionKind
from paddock.ir.training import Form, TrainingDefinition, TrainingTable, TrainingType
from paddock.sim.core.rng import CareerRNG
from paddock.sim.mechanics.energy import gain_energy, spend_energy
from paddock.sim.mechanics.stats import raise_stat, roll_form_improvement
from paddock.sim.telemetry import TrainingGains

if TYPE_CHECKING:
    from paddock.sim.core.entities import Character

logger = logging.getLogger(__name__)

_LOW_ENERGY = 40
_VERY_LOW_ENERGY = 20
_WEAK_STAT = 50
_POOR_FORMS = frozenset({Form.TIRED, Form.BAD})


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


class TrainingEngine:
    """Applies training actions to a character.

    Parameters
    ----------
    table:
        The static training table (costs, gains, form ladder).
    rng:
        Source of jitter and form rolls.  Defaults to an entropy-seeded
        :class:`CareerRNG`.
    deterministic:
        Suppress gain jitter and form rolls for everything this engine does.
    """

    def __init__(
        self,
        table: TrainingTable,
        rng: CareerRNG | None = None,
        deterministic: bool = False,
    ) -> None:
        self._table = table
        self._rng = rng or CareerRNG.from_entropy()
        self.deterministic = deterministic

    # ------------------------------------------------------------------
    # Read-only configuration
    # ------------------------------------------------------------------

    def config(self, training_type: TrainingType | str) -> TrainingDefinition:
        """Return the static configuration for *training_type*.

        Raises :class:`InvalidActionKind` for unknown types.
        """
        return self._table.training(self._resolve(training_type))

    def available_actions(self) -> list[TrainingType]:
        return [t.type for t in self._table.trainings]

    def form_multiplier(self, form: Form) -> float:
        return self._table.form(form).multiplier

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------

    def calculate_gains(
        self,
        character: Character,
        training_type: TrainingType | str,
        deterministic: bool = False,
    ) -> TrainingGains:
        """Compute the gains *training_type* would produce, without applying.

        Stat training: ``max(1, round(base_gain * form_multiplier + jitter))``
        with jitter drawn from ``[-jitter, +jitter]``.  Recovery training
        returns an energy delta only.
        """
        config = self.config(training_type)
        gains = TrainingGains(energy_cost=config.energy_cost)

        if config.is_recovery:
            gains.energy = config.energy_gain - config.energy_cost
            return gains

        multiplier = self.form_multiplier(character.condition.form)
        adjusted = config.base_gain * multiplier
        jitter = 0
        if not (deterministic or self.deterministic) and self._table.jitter:
            jitter = self._rng.random_int(-self._table.jitter, self._table.jitter)

        gain = max(1, _round_half_up(adjusted + jitter))
        setattr(gains, config.primary_stat.value, gain)
        gains.energy = -config.energy_cost
        return gains

    def validate(
        self,
        character: Character,
        training_type: TrainingType | str,
    ) -> str | None:
        """Return the reason *training_type* cannot be applied, or ``None``."""
        try:
            config = self.config(training_type)
        except InvalidActionKind as exc:
            return str(exc)
        if not character.can_train(config.energy_cost):
            return str(InsufficientEnergy(config.energy_cost, character.condition.energy))
        return None

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply_training(
        self,
        character: Character,
        training_type: TrainingType | str,
    ) -> TrainingGains:
        """Apply *training_type* to *character* and return the applied deltas.

        Raises
        ------
        InvalidActionKind
            Unknown training type.
        InsufficientEnergy
            The character cannot afford the energy cost.  Nothing is
            modified.
        """
        config = self.config(training_type)
        if not character.can_train(config.energy_cost):
            raise InsufficientEnergy(config.energy_cost, character.condition.energy)

        intended = self.calculate_gains(character, config.type)
        applied = TrainingGains(energy_cost=config.energy_cost)

        if config.primary_stat is not None:
            stat = config.primary_stat
            delta = raise_stat(character, stat, getattr(intended, stat.value))
            setattr(applied, stat.value, delta)

        applied.energy = spend_energy(character, config.energy_cost)
        if config.energy_gain:
            applied.energy += gain_energy(character, config.energy_gain)

        if config.form_improvement and not self.deterministic:
            applied.form = roll_form_improvement(
                character,
                self._table.form(character.condition.form),
                self._table.form_improvement_chance,
                self._rng,
            )

        logger.debug(
            "%s trained %s: %s", character.name, config.type.value, applied,
        )
        return applied

    # ------------------------------------------------------------------
    # Advice
    # ------------------------------------------------------------------

    def recommendations(self, character: Character) -> list[str]:
        """Plain-language training advice for the character's condition."""
        advice: list[str] = []

        energy = character.condition.energy
        if energy < _VERY_LOW_ENERGY:
            advice.append("Rest recommended - energy is very low")
        elif energy < _LOW_ENERGY:
            advice.append("Consider rest - energy is getting low")

        stats = character.stats
        lowest = min(stats.speed, stats.stamina, stats.power)
        for name in ("speed", "stamina", "power"):
            value = getattr(stats, name)
            if value == lowest and value < _WEAK_STAT:
                advice.append(f"{name.capitalize()} training recommended - lowest stat")

        if character.condition.form in _POOR_FORMS:
            advice.append("Media day recommended - form needs improvement")

        return advice

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve(training_type: TrainingType | str) -> TrainingType:
        try:
            return TrainingType(training_type)
        except ValueError:
            raise InvalidActionKind(training_type) from None
