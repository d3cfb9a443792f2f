"""Tests for the energy mechanics."""

import pytest

from paddock.sim.core.entities import Character
from paddock.sim.mechanics.energy import clamp, gain_energy, spend_energy


def _make_character(energy: int = 100) -> Character:
    character = Character.create("Test")
    character.condition.energy = energy
    return character


class TestClamp:
    @pytest.mark.parametrize("value,expected", [(-5, 0), (0, 0), (55, 55), (100, 100), (130, 100)])
    def test_default_bounds(self, value, expected):
        assert clamp(value) == expected

    def test_custom_bounds(self):
        assert clamp(7, low=10, high=20) == 10


class TestSpendEnergy:
    def test_spend(self):
        character = _make_character(100)
        assert spend_energy(character, 15) == -15
        assert character.condition.energy == 85

    def test_never_below_zero(self):
        character = _make_character(10)
        assert spend_energy(character, 15) == -10
        assert character.condition.energy == 0


class TestGainEnergy:
    def test_gain(self):
        character = _make_character(40)
        assert gain_energy(character, 30) == 30
        assert character.condition.energy == 70

    def test_capped_at_full(self):
        character = _make_character(100)
        assert gain_energy(character, 30) == 0
        assert character.condition.energy == 100
