"""Tests for the static content models and their load-time validation."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from paddock.ir.navigation import NavigationConfig
from paddock.ir.training import ActionKind, Form, TrainingDefinition, TrainingTable, TrainingType
from paddock.sim.content.registry import _DEFAULT_TRAINING_PATH


def _nav(states: list[dict], initial: str = "a") -> dict:
    return {"initial": initial, "states": states}


def _training_data() -> dict:
    return json.loads(_DEFAULT_TRAINING_PATH.read_text())


# ======================================================================
# Navigation
# ======================================================================

class TestNavigationConfig:
    def test_resolve(self):
        config = NavigationConfig.model_validate(_nav([
            {"name": "a", "transitions": ["b"], "inputs": {"1": "b", "2": "quit"}},
            {"name": "b", "transitions": ["a"]},
        ]))
        assert config.resolve("b") == "b"
        assert config.resolve("quit") is ActionKind.QUIT
        assert config.state_names == frozenset({"a", "b"})

    def test_unknown_input_target(self):
        with pytest.raises(ValidationError, match="unknown target 'fly_away'"):
            NavigationConfig.model_validate(_nav([
                {"name": "a", "inputs": {"x": "fly_away"}},
            ]))

    def test_duplicate_states(self):
        with pytest.raises(ValidationError, match="Duplicate state names"):
            NavigationConfig.model_validate(_nav([{"name": "a"}, {"name": "a"}]))

    def test_undefined_initial(self):
        with pytest.raises(ValidationError, match="Initial state 'z' is not defined"):
            NavigationConfig.model_validate(_nav([{"name": "a"}], initial="z"))

    def test_state_named_like_action(self):
        with pytest.raises(ValidationError, match="collide with action ids"):
            NavigationConfig.model_validate(_nav([{"name": "a", "transitions": ["quit"]}, {"name": "quit"}]))

    def test_undefined_auto_progress(self):
        with pytest.raises(ValidationError, match="auto_progress target 'nowhere'"):
            NavigationConfig.model_validate(_nav([
                {"name": "a", "metadata": {"auto_progress": "nowhere"}},
            ]))

    def test_frozen(self):
        config = NavigationConfig.model_validate(_nav([{"name": "a"}]))
        with pytest.raises(ValidationError):
            config.initial = "b"


# ======================================================================
# Training table
# ======================================================================

class TestTrainingTable:
    def test_packaged_table(self):
        table = TrainingTable.model_validate(_training_data())
        assert table.training(TrainingType.SPEED).energy_cost == 15
        assert table.training(TrainingType.REST).is_recovery
        assert table.form(Form.NORMAL).multiplier == 1.0

    def test_missing_training(self):
        data = _training_data()
        data["trainings"] = [t for t in data["trainings"] if t["type"] != "media"]
        with pytest.raises(ValidationError, match="Training table missing"):
            TrainingTable.model_validate(data)

    def test_missing_form(self):
        data = _training_data()
        data["forms"] = [f for f in data["forms"] if f["form"] != "Great"]
        with pytest.raises(ValidationError, match="Form ladder missing"):
            TrainingTable.model_validate(data)

    def test_stat_training_needs_gain(self):
        with pytest.raises(ValidationError, match="positive base_gain"):
            TrainingDefinition(type=TrainingType.SPEED, energy_cost=15, primary_stat="speed")

    def test_recovery_cannot_gain_stats(self):
        with pytest.raises(ValidationError, match="recovery training cannot carry"):
            TrainingDefinition(type=TrainingType.REST, energy_cost=0, base_gain=3)

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            TrainingDefinition(type=TrainingType.REST, energy_cost=-5)
