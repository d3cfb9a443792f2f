"""Definition models for the career engine's static configuration.

Training costs, the form ladder, race schedules and the navigation graph
are all Pydantic models that load from the JSON files under
``paddock/data/`` and are never mutated after loading.
"""

from .navigation import NavigationConfig, StateDefinition, StateMetadata
from .schedule import RaceEntry, RaceKind, ScheduleDefinition, Surface
from .training import (
    TRAINING_ACTIONS,
    ActionKind,
    Form,
    FormDefinition,
    StatName,
    TrainingDefinition,
    TrainingTable,
    TrainingType,
)

__all__ = [
    # navigation
    "NavigationConfig",
    "StateDefinition",
    "StateMetadata",
    # schedule
    "RaceEntry",
    "RaceKind",
    "ScheduleDefinition",
    "Surface",
    # training
    "TRAINING_ACTIONS",
    "ActionKind",
    "Form",
    "FormDefinition",
    "StatName",
    "TrainingDefinition",
    "TrainingTable",
    "TrainingType",
]
