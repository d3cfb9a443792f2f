"""Training definitions -- the per-action cost/gain table and the form ladder."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ActionKind(str, Enum):
    """Every action identifier an input map may route to.

    The enumeration is closed: navigation config that names anything else
    fails validation at load time.
    """

    # Training (one turn each)
    SPEED_TRAINING = "speed_training"
    STAMINA_TRAINING = "stamina_training"
    POWER_TRAINING = "power_training"
    REST_TRAINING = "rest_training"
    MEDIA_TRAINING = "media_training"

    # Session management
    SAVE_GAME = "save_game"
    LOAD_GAME = "load_game"
    SHOW_RACES = "show_races"
    CREATE_CHARACTER = "create_character"
    START_TUTORIAL = "start_tutorial"
    NEW_CAREER = "new_career"
    QUIT = "quit"

    # Race day
    START_RACE = "start_race"
    CONTINUE_CAREER = "continue_career"

    # Navigation helpers
    GO_BACK = "go_back"


class TrainingType(str, Enum):
    """Kinds of training the engine knows how to apply."""

    SPEED = "speed"
    STAMINA = "stamina"
    POWER = "power"
    REST = "rest"
    MEDIA = "media"


# Action identifiers that consume a turn, mapped to the training they apply.
TRAINING_ACTIONS: dict[ActionKind, TrainingType] = {
    ActionKind.SPEED_TRAINING: TrainingType.SPEED,
    ActionKind.STAMINA_TRAINING: TrainingType.STAMINA,
    ActionKind.POWER_TRAINING: TrainingType.POWER,
    ActionKind.REST_TRAINING: TrainingType.REST,
    ActionKind.MEDIA_TRAINING: TrainingType.MEDIA,
}


class Form(str, Enum):
    """Qualitative condition of the character, worst to best."""

    BAD = "Bad"
    TIRED = "Tired"
    NORMAL = "Normal"
    GOOD = "Good"
    GREAT = "Great"
    EXCELLENT = "Excellent"


class StatName(str, Enum):
    SPEED = "speed"
    STAMINA = "stamina"
    POWER = "power"


class TrainingDefinition(BaseModel):
    """Static cost/gain configuration for one training type."""

    model_config = {"frozen": True}

    type: TrainingType
    energy_cost: int = Field(ge=0)
    """Energy spent when the training is applied."""

    base_gain: int = Field(default=0, ge=0)
    """Stat points before form multiplier and jitter."""

    primary_stat: StatName | None = None
    """Stat raised by this training.  ``None`` for recovery actions."""

    energy_gain: int = Field(default=0, ge=0)
    """Energy restored.  Only recovery actions set this."""

    form_improvement: bool = False
    """Whether a successful session may roll a form improvement."""

    @property
    def is_recovery(self) -> bool:
        return self.primary_stat is None

    @model_validator(mode="after")
    def _validate_shape(self) -> "TrainingDefinition":
        if self.primary_stat is not None and self.base_gain <= 0:
            raise ValueError(
                f"{self.type.value}: stat training needs a positive base_gain"
            )
        if self.primary_stat is None and self.base_gain:
            raise ValueError(
                f"{self.type.value}: recovery training cannot carry a base_gain"
            )
        return self


class FormDefinition(BaseModel):
    """One rung of the form ladder."""

    model_config = {"frozen": True}

    form: Form
    multiplier: float = Field(gt=0)
    """Scales stat gains while the character is in this form."""

    improves_to: tuple[Form, ...] = ()
    """Legal next forms after a successful improvement roll."""


class TrainingTable(BaseModel):
    """The full training configuration: actions plus the form ladder."""

    model_config = {"frozen": True}

    trainings: tuple[TrainingDefinition, ...]
    forms: tuple[FormDefinition, ...]
    form_improvement_chance: float = Field(default=0.3, ge=0.0, le=1.0)
    jitter: int = Field(default=1, ge=0)
    """Random stat jitter is drawn uniformly from ``[-jitter, +jitter]``."""

    @model_validator(mode="after")
    def _validate_coverage(self) -> "TrainingTable":
        defined = [t.type for t in self.trainings]
        if len(defined) != len(set(defined)):
            raise ValueError("Duplicate training types in training table")
        missing = set(TrainingType) - set(defined)
        if missing:
            raise ValueError(
                f"Training table missing: {sorted(m.value for m in missing)}"
            )
        forms = {f.form for f in self.forms}
        if forms != set(Form):
            raise ValueError(
                f"Form ladder missing: {sorted(f.value for f in set(Form) - forms)}"
            )
        return self

    def training(self, training_type: TrainingType) -> TrainingDefinition:
        for t in self.trainings:
            if t.type == training_type:
                return t
        raise KeyError(training_type)

    def form(self, form: Form) -> FormDefinition:
        for f in self.forms:
            if f.form == form:
                return f
        raise KeyError(form)
