"""Tests for CareerSession -- setup, turns, races and persistence."""

from __future__ import annotations

import pytest

from paddock.errors import (
    InvalidCharacterName,
    NoActiveCharacter,
    NoPendingRace,
    RacePending,
)
from paddock.ir.training import TrainingType
from paddock.session.career import TUTORIAL_CHARACTER, CareerSession
from paddock.session.store import MemorySessionStore
from paddock.sim.content.registry import ContentRegistry
from paddock.sim.race import ScriptedRaceSimulator


def _make_session(registry: ContentRegistry, position: int = 1, seed: int = 11) -> CareerSession:
    return CareerSession(
        registry,
        store=MemorySessionStore(),
        seed=seed,
        race_simulator=ScriptedRaceSimulator(position=position),
    )


def _play_to_first_race(session: CareerSession) -> None:
    for _ in range(3):
        session.train(TrainingType.REST)


# ======================================================================
# Setup
# ======================================================================

class TestSetup:
    def test_no_character_yet(self, registry: ContentRegistry):
        session = _make_session(registry)
        assert not session.has_character
        with pytest.raises(NoActiveCharacter):
            session.train(TrainingType.SPEED)
        with pytest.raises(NoActiveCharacter):
            session.progress()

    def test_create_character(self, registry: ContentRegistry):
        session = _make_session(registry)
        character = session.create_character("  Thunder ")

        assert character.name == "Thunder"
        assert character.stats.model_dump() == {"speed": 20, "stamina": 20, "power": 20}
        assert character.condition.energy == 100
        assert character.career.turn == 1
        assert not session.is_tutorial
        assert session.timeline.schedule_id == "career"

    def test_blank_name_keeps_current_career(self, registry: ContentRegistry):
        session = _make_session(registry)
        session.create_character("Thunder")
        with pytest.raises(InvalidCharacterName):
            session.create_character("   ")
        assert session.active_character.name == "Thunder"

    def test_randomized_stats_in_range(self, registry: ContentRegistry):
        character = _make_session(registry).create_character("Dice", randomize=True)
        for value in character.stats.model_dump().values():
            assert 15 <= value <= 25

    def test_randomized_stats_are_seeded(self, registry: ContentRegistry):
        a = _make_session(registry, seed=5).create_character("Dice", randomize=True)
        b = _make_session(registry, seed=5).create_character("Dice", randomize=True)
        assert a.stats == b.stats

    def test_tutorial(self, registry: ContentRegistry):
        session = _make_session(registry)
        character = session.start_tutorial()
        assert character.name == TUTORIAL_CHARACTER
        assert character.stats.total == 75
        assert session.is_tutorial
        assert session.timeline.schedule_id == "tutorial"

    def test_reset(self, registry: ContentRegistry):
        session = _make_session(registry)
        session.create_character("Thunder")
        session.reset()
        assert not session.has_character
        assert session.pending_race is None


# ======================================================================
# Races
# ======================================================================

class TestRaces:
    def test_race_becomes_pending(self, registry: ContentRegistry):
        session = _make_session(registry)
        session.create_character("Thunder")
        _play_to_first_race(session)

        assert session.pending_race.name == "Maiden Sprint"
        with pytest.raises(RacePending):
            session.train(TrainingType.SPEED)
        assert session.active_character.career.turn == 4

    def test_run_race_records_result(self, registry: ContentRegistry):
        session = _make_session(registry, position=2)
        session.create_character("Thunder")
        _play_to_first_race(session)

        outcome = session.run_race("FRONT")

        character = session.active_character
        assert outcome.player_position == 2
        assert session.pending_race is None
        assert session.last_outcome is outcome
        assert character.career.races_run == 1
        assert character.career.races_won == 0
        record = character.race_history[0]
        assert (record.race, record.turn, record.position, record.strategy) == (
            "Maiden Sprint", 4, 2, "FRONT",
        )

    def test_run_race_without_pending(self, registry: ContentRegistry):
        session = _make_session(registry)
        session.create_character("Thunder")
        with pytest.raises(NoPendingRace, match="turn 1"):
            session.run_race()

    def test_full_career_completes(self, registry: ContentRegistry):
        session = _make_session(registry)
        session.create_character("Thunder")

        while not session.is_career_complete:
            if session.pending_race is not None:
                session.run_race()
            else:
                session.train(TrainingType.REST)

        character = session.active_character
        assert character.career.races_won == 4
        assert character.career.turn == 12
        assert [r.turn for r in character.race_history] == [4, 7, 10, 12]

    def test_tutorial_uses_scripted_win(self, registry: ContentRegistry):
        session = _make_session(registry, position=3)
        session.start_tutorial()
        for kind in ["rest", "stamina", "rest", "stamina", "rest"]:
            session.train(kind)
        assert session.pending_race.name == "Tutorial Sprint Cup"
        assert session.run_race().won
        assert session.is_career_complete


# ======================================================================
# Persistence
# ======================================================================

class TestPersistence:
    def test_save_and_load(self, registry: ContentRegistry):
        session = _make_session(registry)
        session.create_character("Thunder")
        session.train(TrainingType.SPEED)
        saved_stats = session.active_character.stats.model_copy()
        ref = session.save()["data"]["ref"]

        session.train(TrainingType.SPEED)
        loaded = session.load(ref)

        assert loaded["success"]
        assert session.active_character.career.turn == 2
        assert session.active_character.stats == saved_stats
        assert session.latest_save() == ref

    def test_load_missing_keeps_session(self, registry: ContentRegistry):
        session = _make_session(registry)
        session.create_character("Thunder")
        result = session.load("ghost")
        assert not result["success"]
        assert session.active_character.name == "Thunder"

    def test_save_requires_character(self, registry: ContentRegistry):
        with pytest.raises(NoActiveCharacter):
            _make_session(registry).save()

    def test_latest_save_none(self, registry: ContentRegistry):
        assert _make_session(registry).latest_save() is None
