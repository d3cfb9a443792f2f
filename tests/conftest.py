"""Shared fixtures for the career engine tests."""

from __future__ import annotations

import pytest

from paddock.session.app import GameApp
from paddock.session.store import MemorySessionStore
from paddock.sim.content.registry import ContentRegistry
from paddock.sim.race import ScriptedRaceSimulator


@pytest.fixture(scope="session")
def registry() -> ContentRegistry:
    """Registry with the packaged content loaded once."""
    return ContentRegistry.with_defaults()


@pytest.fixture
def app(registry: ContentRegistry) -> GameApp:
    """Seeded app whose career races are always won."""
    return GameApp(
        registry=registry,
        store=MemorySessionStore(),
        seed=1234,
        race_simulator=ScriptedRaceSimulator(position=1),
    )
