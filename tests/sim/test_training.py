"""Tests for TrainingEngine -- gain calculation and application."""

from __future__ import annotations

import pytest

from paddock.errors import InsufficientEnergy, InvalidActionKind
from paddock.ir.training import Form, TrainingTable, TrainingType
from paddock.sim.content.registry import ContentRegistry
from paddock.sim.core.entities import Character
from paddock.sim.core.rng import CareerRNG
from paddock.sim.training import TrainingEngine, _round_half_up


# ======================================================================
# Fixtures
# ======================================================================

@pytest.fixture
def table(registry: ContentRegistry) -> TrainingTable:
    return registry.training_table


@pytest.fixture
def engine(table: TrainingTable) -> TrainingEngine:
    return TrainingEngine(table, rng=CareerRNG(42), deterministic=True)


def _make_character(energy: int = 100, form: Form = Form.NORMAL, **stats: int) -> Character:
    character = Character.create("Test", stats={"speed": 20, "stamina": 20, "power": 20, **stats})
    character.condition.energy = energy
    character.condition.form = form
    return character


# ======================================================================
# Configuration
# ======================================================================

class TestConfig:
    def test_costs(self, engine: TrainingEngine):
        assert engine.config(TrainingType.SPEED).energy_cost == 15
        assert engine.config(TrainingType.STAMINA).energy_cost == 10
        assert engine.config("power").energy_cost == 15
        assert engine.config("rest").energy_gain == 30
        assert engine.config("media").energy_gain == 15

    def test_available_actions(self, engine: TrainingEngine):
        assert set(engine.available_actions()) == set(TrainingType)

    def test_unknown_type(self, engine: TrainingEngine):
        with pytest.raises(InvalidActionKind, match="Invalid training type: flying"):
            engine.config("flying")


# ======================================================================
# calculate_gains
# ======================================================================

class TestCalculateGains:
    @pytest.mark.parametrize("form,expected", [
        (Form.BAD, 6),        # 8 * 0.80 = 6.4
        (Form.TIRED, 7),      # 8 * 0.90 = 7.2
        (Form.NORMAL, 8),
        (Form.GOOD, 8),       # 8 * 1.05 = 8.4
        (Form.GREAT, 9),      # 8 * 1.10 = 8.8
        (Form.EXCELLENT, 9),  # 8 * 1.15 = 9.2
    ])
    def test_speed_by_form(self, engine: TrainingEngine, form: Form, expected: int):
        gains = engine.calculate_gains(_make_character(form=form), TrainingType.SPEED)
        assert gains.speed == expected
        assert gains.stamina == gains.power == 0
        assert gains.energy == -15

    def test_rounds_to_nearest(self, engine: TrainingEngine):
        good = engine.calculate_gains(_make_character(form=Form.GOOD), TrainingType.STAMINA)
        great = engine.calculate_gains(_make_character(form=Form.GREAT), TrainingType.STAMINA)
        assert good.stamina == 7   # 7.35
        assert great.stamina == 8  # 7.7

    def test_recovery_is_energy_only(self, engine: TrainingEngine):
        rest = engine.calculate_gains(_make_character(), TrainingType.REST)
        media = engine.calculate_gains(_make_character(), TrainingType.MEDIA)
        assert (rest.energy, rest.stat_total) == (30, 0)
        assert (media.energy, media.stat_total) == (15, 0)

    def test_jitter_bounds(self, table: TrainingTable):
        engine = TrainingEngine(table, rng=CareerRNG(0))
        seen = {
            engine.calculate_gains(_make_character(), TrainingType.SPEED).speed
            for _ in range(200)
        }
        assert seen == {7, 8, 9}

    def test_deterministic_flag_per_call(self, table: TrainingTable):
        engine = TrainingEngine(table, rng=CareerRNG(0))
        for _ in range(50):
            gains = engine.calculate_gains(_make_character(), TrainingType.SPEED, deterministic=True)
            assert gains.speed == 8

    def test_does_not_mutate(self, engine: TrainingEngine):
        character = _make_character()
        before = character.to_data()
        engine.calculate_gains(character, TrainingType.POWER)
        assert character.to_data() == before


# ======================================================================
# apply_training
# ======================================================================

class TestApplyTraining:
    def test_speed(self, engine: TrainingEngine):
        character = _make_character()
        gains = engine.apply_training(character, TrainingType.SPEED)

        assert character.stats.speed == 28
        assert character.condition.energy == 85
        assert gains.speed == 8
        assert gains.energy == -15
        assert gains.energy_cost == 15

    def test_insufficient_energy_leaves_character_untouched(self, engine: TrainingEngine):
        character = _make_character(energy=10)
        before = character.to_data()

        with pytest.raises(InsufficientEnergy) as exc_info:
            engine.apply_training(character, TrainingType.SPEED)

        assert exc_info.value.required == 15
        assert exc_info.value.available == 10
        assert character.to_data() == before

    def test_exact_energy_is_enough(self, engine: TrainingEngine):
        character = _make_character(energy=15)
        engine.apply_training(character, TrainingType.SPEED)
        assert character.condition.energy == 0

    def test_rest_at_full_energy_stays_full(self, engine: TrainingEngine):
        character = _make_character(energy=100)
        gains = engine.apply_training(character, TrainingType.REST)
        assert character.condition.energy == 100
        assert gains.energy == 0

    def test_rest_restores(self, engine: TrainingEngine):
        character = _make_character(energy=50)
        engine.apply_training(character, TrainingType.REST)
        assert character.condition.energy == 80

    def test_stat_capped_at_100(self, engine: TrainingEngine):
        character = _make_character(speed=97)
        gains = engine.apply_training(character, TrainingType.SPEED)
        assert character.stats.speed == 100
        assert gains.speed == 3

    def test_unknown_type(self, engine: TrainingEngine):
        with pytest.raises(InvalidActionKind):
            engine.apply_training(_make_character(), "nap")

    def test_form_improves_on_certain_roll(self, table: TrainingTable):
        certain = table.model_copy(update={"form_improvement_chance": 1.0})
        engine = TrainingEngine(certain, rng=CareerRNG(3))
        character = _make_character()

        gains = engine.apply_training(character, TrainingType.MEDIA)

        assert gains.form in (Form.GOOD, Form.GREAT)
        assert character.condition.form == gains.form

    def test_rest_never_rolls_form(self, table: TrainingTable):
        certain = table.model_copy(update={"form_improvement_chance": 1.0})
        engine = TrainingEngine(certain, rng=CareerRNG(3))
        character = _make_character()

        assert engine.apply_training(character, TrainingType.REST).form is None
        assert character.condition.form == Form.NORMAL

    def test_deterministic_engine_skips_form_roll(self, table: TrainingTable):
        certain = table.model_copy(update={"form_improvement_chance": 1.0})
        engine = TrainingEngine(certain, rng=CareerRNG(3), deterministic=True)
        character = _make_character()

        engine.apply_training(character, TrainingType.SPEED)
        assert character.condition.form == Form.NORMAL

    def test_values_stay_in_bounds(self, table: TrainingTable):
        engine = TrainingEngine(table, rng=CareerRNG(11))
        rng = CareerRNG(12)
        character = _make_character()
        for _ in range(300):
            kind = rng.random_choice(list(TrainingType))
            if engine.validate(character, kind) is None:
                engine.apply_training(character, kind)
            for value in (character.stats.speed, character.stats.stamina,
                          character.stats.power, character.condition.energy):
                assert 0 <= value <= 100


# ======================================================================
# validate / recommendations
# ======================================================================

class TestValidate:
    def test_ok(self, engine: TrainingEngine):
        assert engine.validate(_make_character(), TrainingType.SPEED) is None

    def test_low_energy(self, engine: TrainingEngine):
        reason = engine.validate(_make_character(energy=5), TrainingType.STAMINA)
        assert reason == "Insufficient energy. Required: 10, Available: 5"

    def test_unknown(self, engine: TrainingEngine):
        assert engine.validate(_make_character(), "juggling") == "Invalid training type: juggling"


class TestRecommendations:
    def test_fresh_character(self, engine: TrainingEngine):
        advice = engine.recommendations(_make_character())
        # All three stats tie for lowest
        assert advice == [
            "Speed training recommended - lowest stat",
            "Stamina training recommended - lowest stat",
            "Power training recommended - lowest stat",
        ]

    def test_very_low_energy(self, engine: TrainingEngine):
        advice = engine.recommendations(_make_character(energy=10, speed=60, stamina=60, power=60))
        assert advice == ["Rest recommended - energy is very low"]

    def test_low_energy_and_poor_form(self, engine: TrainingEngine):
        advice = engine.recommendations(
            _make_character(energy=30, form=Form.TIRED, speed=60, stamina=60, power=60)
        )
        assert advice == [
            "Consider rest - energy is getting low",
            "Media day recommended - form needs improvement",
        ]


class TestRoundHalfUp:
    @pytest.mark.parametrize("value,expected", [(2.5, 3), (8.5, 9), (8.49, 8), (0.5, 1), (7.0, 7)])
    def test_round_half_up(self, value: float, expected: int):
        assert _round_half_up(value) == expected
