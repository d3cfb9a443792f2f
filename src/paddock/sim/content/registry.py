"""Content registry -- loads and serves the training table, race schedules,
and navigation graph for the career simulator.

Default content is loaded from the JSON files in ``paddock/data/``.  Each
``load_*`` method also accepts an explicit path so tests and tools can
swap in alternative content.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from paddock.ir.navigation import NavigationConfig
from paddock.ir.schedule import ScheduleDefinition
from paddock.ir.training import TrainingTable

# Default paths relative to the package root.
_DATA_DIR = Path(__file__).resolve().parents[2] / "data"  # sim/content -> paddock/data
_DEFAULT_TRAINING_PATH = _DATA_DIR / "training.json"
_DEFAULT_SCHEDULES_PATH = _DATA_DIR / "schedules.json"
_DEFAULT_NAVIGATION_PATH = _DATA_DIR / "navigation.json"

CAREER_SCHEDULE = "career"
TUTORIAL_SCHEDULE = "tutorial"


def _read_json(path: str | Path) -> Any:
    with open(Path(path)) as f:
        return json.load(f)


class ContentRegistry:
    """Loads and serves every static table the engine runs on.

    The registry is the single source of truth for configuration during a
    session.  Tables are parsed into frozen Pydantic models once; nothing
    downstream mutates them.

    Usage::

        registry = ContentRegistry()
        registry.load_training_table()
        registry.load_schedules()
        registry.load_navigation()

        table = registry.training_table
        career = registry.get_schedule("career")
    """

    def __init__(self) -> None:
        self._training_table: TrainingTable | None = None
        self.schedules: dict[str, ScheduleDefinition] = {}
        self._navigation: NavigationConfig | None = None

    @classmethod
    def with_defaults(cls) -> ContentRegistry:
        """Registry with every default table loaded."""
        registry = cls()
        registry.load_training_table()
        registry.load_schedules()
        registry.load_navigation()
        return registry

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_training_table(self, path: str | Path | None = None) -> None:
        """Load the training table from a JSON file.

        Parameters
        ----------
        path:
            Path to the JSON file.  Defaults to ``paddock/data/training.json``.
        """
        raw = _read_json(path or _DEFAULT_TRAINING_PATH)
        self._training_table = TrainingTable.model_validate(raw)

    def load_schedules(self, path: str | Path | None = None) -> None:
        """Load race schedules from a JSON file.

        The file holds a ``schedules`` list; each entry is keyed by its
        ``id``.  Loading again replaces schedules with the same id.
        """
        raw = _read_json(path or _DEFAULT_SCHEDULES_PATH)
        for raw_schedule in raw["schedules"]:
            schedule = ScheduleDefinition.model_validate(raw_schedule)
            self.schedules[schedule.id] = schedule

    def load_navigation(self, path: str | Path | None = None) -> None:
        """Load the navigation graph from a JSON file."""
        raw = _read_json(path or _DEFAULT_NAVIGATION_PATH)
        self._navigation = NavigationConfig.model_validate(raw)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def training_table(self) -> TrainingTable:
        if self._training_table is None:
            raise RuntimeError("Training table not loaded; call load_training_table()")
        return self._training_table

    @property
    def navigation(self) -> NavigationConfig:
        if self._navigation is None:
            raise RuntimeError("Navigation not loaded; call load_navigation()")
        return self._navigation

    def get_schedule(self, schedule_id: str) -> ScheduleDefinition:
        try:
            return self.schedules[schedule_id]
        except KeyError:
            raise KeyError(
                f"Unknown schedule {schedule_id!r}; loaded: {sorted(self.schedules)}"
            ) from None

    def list_schedule_ids(self) -> list[str]:
        return sorted(self.schedules)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        n_trainings = (
            len(self._training_table.trainings) if self._training_table else 0
        )
        n_states = len(self._navigation.states) if self._navigation else 0
        return (
            f"ContentRegistry(trainings={n_trainings}, "
            f"schedules={len(self.schedules)}, "
            f"states={n_states})"
        )
