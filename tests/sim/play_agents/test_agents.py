"""Tests for the training agents' decision rules."""

from __future__ import annotations

from paddock.ir.schedule import RaceEntry, RaceKind, Surface
from paddock.ir.training import Form, TrainingType
from paddock.sim.core.entities import Character
from paddock.sim.core.rng import CareerRNG
from paddock.sim.play_agents import HeuristicAgent, RandomAgent
from paddock.sim.play_agents.random_agent import STRATEGY_CHOICES
from paddock.sim.telemetry import UpcomingRace

ALL_TRAININGS = list(TrainingType)


def _make_character(
    speed: int = 20,
    stamina: int = 20,
    power: int = 20,
    energy: int = 100,
    form: Form = Form.NORMAL,
) -> Character:
    character = Character.create("Agent", stats={"speed": speed, "stamina": stamina, "power": power})
    character.condition.energy = energy
    character.condition.form = form
    return character


def _make_upcoming(kind: RaceKind = RaceKind.SPRINT, turns_until: int = 3) -> UpcomingRace:
    race = RaceEntry(turn=4, name="Test Race", kind=kind, surface=Surface.DIRT, distance=1200)
    return UpcomingRace(race=race, turns_until=turns_until, is_next=turns_until == 1)


# ---------------------------------------------------------------------------
# RandomAgent
# ---------------------------------------------------------------------------

class TestRandomAgent:
    def test_only_picks_affordable(self):
        agent = RandomAgent(rng=CareerRNG(1))
        character = _make_character()
        affordable = [TrainingType.REST, TrainingType.MEDIA]
        picks = {agent.choose_training(character, None, affordable) for _ in range(50)}
        assert picks <= set(affordable)

    def test_seeded(self):
        character = _make_character()
        first, second = RandomAgent(rng=CareerRNG(9)), RandomAgent(rng=CareerRNG(9))
        a = [first.choose_training(character, None, ALL_TRAININGS) for _ in range(10)]
        b = [second.choose_training(character, None, ALL_TRAININGS) for _ in range(10)]
        assert a == b

    def test_rest_bias_when_exhausted(self):
        agent = RandomAgent(rng=CareerRNG(1), rest_bias=True)
        character = _make_character(energy=10)
        for _ in range(10):
            assert agent.choose_training(character, None, ALL_TRAININGS) == TrainingType.REST

    def test_strategy_choice(self):
        agent = RandomAgent(rng=CareerRNG(4))
        race = _make_upcoming().race
        assert agent.choose_strategy(_make_character(), race) in STRATEGY_CHOICES


# ---------------------------------------------------------------------------
# HeuristicAgent
# ---------------------------------------------------------------------------

class TestHeuristicAgent:
    def test_rests_when_nothing_affordable(self):
        agent = HeuristicAgent()
        choice = agent.choose_training(
            _make_character(energy=5), _make_upcoming(), [TrainingType.REST, TrainingType.MEDIA],
        )
        assert choice == TrainingType.REST

    def test_tops_up_before_race(self):
        agent = HeuristicAgent(pre_race_energy=50)
        choice = agent.choose_training(
            _make_character(energy=40), _make_upcoming(turns_until=1), ALL_TRAININGS,
        )
        assert choice == TrainingType.REST

    def test_fixes_poor_form(self):
        agent = HeuristicAgent()
        choice = agent.choose_training(_make_character(form=Form.TIRED), _make_upcoming(), ALL_TRAININGS)
        assert choice == TrainingType.MEDIA

    def test_trains_weakest_focus_stat(self):
        agent = HeuristicAgent()
        character = _make_character(speed=40, stamina=10, power=30)
        # Sprint cares about speed and power; stamina is ignored.
        assert agent.choose_training(character, _make_upcoming(RaceKind.SPRINT), ALL_TRAININGS) == TrainingType.POWER
        assert agent.choose_training(character, _make_upcoming(RaceKind.LONG), ALL_TRAININGS) == TrainingType.STAMINA

    def test_skips_capped_stats(self):
        agent = HeuristicAgent()
        character = _make_character(speed=100, stamina=50, power=100)
        choice = agent.choose_training(character, _make_upcoming(RaceKind.SPRINT), ALL_TRAININGS)
        assert choice == TrainingType.STAMINA

    def test_no_upcoming_race(self):
        agent = HeuristicAgent()
        character = _make_character(speed=30, stamina=25, power=20)
        assert agent.choose_training(character, None, ALL_TRAININGS) == TrainingType.POWER

    def test_strategy(self):
        agent = HeuristicAgent(rng=CareerRNG(0))
        race = _make_upcoming().race
        assert agent.choose_strategy(_make_character(speed=40), race) == "FRONT"
        assert agent.choose_strategy(_make_character(stamina=40), race) == "LATE"
        assert agent.choose_strategy(_make_character(power=40), race) == "MID"
        assert agent.choose_strategy(_make_character(), race) == "MID"
