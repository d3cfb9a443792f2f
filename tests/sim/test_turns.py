"""Tests for TurnController -- turn progression and race triggering."""

from __future__ import annotations

import pytest

from paddock.errors import InsufficientEnergy, InvalidActionKind
from paddock.ir.training import TrainingType
from paddock.sim.content.registry import CAREER_SCHEDULE, ContentRegistry
from paddock.sim.core.entities import Character
from paddock.sim.core.rng import CareerRNG
from paddock.sim.timeline import Timeline
from paddock.sim.training import TrainingEngine
from paddock.sim.turns import TurnController


@pytest.fixture
def controller(registry: ContentRegistry) -> TurnController:
    return _make_controller(registry)


def _make_controller(registry: ContentRegistry, character: Character | None = None) -> TurnController:
    return TurnController(
        character or Character.create("Thunder"),
        Timeline(registry.get_schedule(CAREER_SCHEDULE)),
        TrainingEngine(registry.training_table, rng=CareerRNG(7), deterministic=True),
    )


# ======================================================================
# process_turn
# ======================================================================

class TestProcessTurn:
    def test_advances_exactly_one_turn(self, controller: TurnController):
        result = controller.process_turn(TrainingType.SPEED)

        assert result.success
        assert result.action == TrainingType.SPEED
        assert (result.previous_turn, result.new_turn) == (1, 2)
        assert controller.character.career.turn == 2
        assert result.gains.speed == 8
        assert result.message == "Training complete! Turn 2 begins."
        assert not result.race_triggered

    def test_race_fires_on_turn_entered(self, controller: TurnController):
        for _ in range(2):
            controller.process_turn(TrainingType.REST)
        result = controller.process_turn(TrainingType.REST)

        assert result.new_turn == 4
        assert result.race_triggered
        assert result.race.name == "Maiden Sprint"
        assert result.race_number == 1
        assert result.total_races == 4
        assert result.is_first_race
        assert not result.is_final_race
        assert result.message == "Training complete! Maiden Sprint starts now!"

    def test_insufficient_energy_is_atomic(self, controller: TurnController):
        controller.character.condition.energy = 10
        before = controller.character.to_data()

        with pytest.raises(InsufficientEnergy):
            controller.process_turn(TrainingType.SPEED)

        assert controller.character.to_data() == before
        assert controller.character.career.turn == 1

    def test_unknown_action_is_atomic(self, controller: TurnController):
        with pytest.raises(InvalidActionKind):
            controller.process_turn("sleepwalk")
        assert controller.character.career.turn == 1

    def test_schedule_determinism(self, controller: TurnController):
        race_turns = []
        results = []
        for _ in range(12):
            result = controller.process_turn(TrainingType.REST)
            results.append(result)
            if result.race_triggered:
                race_turns.append(result.new_turn)

        assert race_turns == [4, 7, 10, 12]
        assert results[10].is_final_race
        assert not any(r.career_complete for r in results[:11])
        assert results[11].career_complete
        assert controller.is_career_complete

    def test_turn_is_monotonic(self, controller: TurnController):
        turns = [controller.character.career.turn]
        for kind in [TrainingType.SPEED, TrainingType.REST, TrainingType.STAMINA, TrainingType.MEDIA]:
            controller.process_turn(kind)
            turns.append(controller.character.career.turn)
        assert turns == [1, 2, 3, 4, 5]


# ======================================================================
# simulate
# ======================================================================

class TestSimulate:
    def test_stops_on_first_failure(self, controller: TurnController):
        actions = [TrainingType.SPEED] * 8
        results = controller.simulate(actions)

        # 100 energy pays for six speed sessions; the seventh fails
        assert [r.success for r in results] == [True] * 6 + [False]
        failure = results[-1]
        assert failure.new_turn == failure.previous_turn == 7
        assert "Insufficient energy" in failure.error

    def test_stops_once_complete(self, controller: TurnController):
        results = controller.simulate([TrainingType.REST] * 20)
        assert len(results) == 12
        assert results[-1].career_complete


# ======================================================================
# Queries
# ======================================================================

class TestQueries:
    def test_upcoming_and_current_race(self, controller: TurnController):
        assert controller.upcoming_race().race.turn == 4
        assert controller.current_race() is None
        controller.simulate([TrainingType.REST] * 3)
        assert controller.current_race().name == "Maiden Sprint"
        assert controller.upcoming_race().race.name == "Mile Championship"

    def test_recommendations_before_race(self, controller: TurnController):
        controller.simulate([TrainingType.REST] * 2)  # turn 3, race on 4

        advice = controller.recommendations()

        assert "Sprint race approaching - focus on Speed and Power training" in advice
        assert "Race is NEXT - consider rest to ensure good energy" in advice

    def test_no_race_advice_when_far(self, controller: TurnController):
        advice = controller.recommendations()
        assert not any("approaching" in a for a in advice)

    def test_progress(self, controller: TurnController):
        controller.simulate([TrainingType.REST] * 4)  # turn 5
        progress = controller.progress()

        assert progress.current_turn == 5
        assert progress.total_turns == 12
        assert progress.races_completed == 1
        assert progress.races_remaining == 3
        assert progress.next_race.name == "Mile Championship"
        assert not progress.is_career_complete

    def test_validate(self, controller: TurnController):
        assert controller.validate() == []
