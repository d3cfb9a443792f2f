"""Navigation definitions -- the static screen graph and its input maps."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from .training import ActionKind

_ACTION_VALUES: frozenset[str] = frozenset(a.value for a in ActionKind)


class StateMetadata(BaseModel):
    """Per-state flags that change how input is interpreted."""

    model_config = {"frozen": True}

    description: str = ""
    accepts_empty: bool = False
    """ENTER (the empty token) is a meaningful input here."""

    accepts_free_text: bool = False
    """Unmapped tokens accumulate as literal text instead of being rejected."""

    auto_progress: str | None = None
    """State to advance to without further input."""

    auto_progress_ms: int = Field(default=0, ge=0)
    """Delay a caller should wait before auto-advancing."""

    back_enabled: bool = False
    terminal: bool = False
    """Terminal states are allowed to have no outgoing transitions."""


class StateDefinition(BaseModel):
    """One screen: where it may go, and what each input token means."""

    model_config = {"frozen": True}

    name: str
    transitions: frozenset[str] = frozenset()
    inputs: dict[str, str] = Field(default_factory=dict)
    """Raw token -> state name or :class:`ActionKind` value."""

    metadata: StateMetadata = Field(default_factory=StateMetadata)


class NavigationConfig(BaseModel):
    """The whole graph.  Loaded once; never mutated afterwards."""

    model_config = {"frozen": True}

    initial: str
    states: tuple[StateDefinition, ...]

    @model_validator(mode="after")
    def _validate_references(self) -> "NavigationConfig":
        """Reject input targets that are neither a state nor an action.

        Graph-shape problems (unreachable states, dead ends) are left to
        :meth:`NavigationStateMachine.validate`, which reports instead of
        raising.
        """
        names = [s.name for s in self.states]
        if len(names) != len(set(names)):
            raise ValueError("Duplicate state names in navigation config")
        known = set(names)
        if self.initial not in known:
            raise ValueError(f"Initial state {self.initial!r} is not defined")

        clashes = known & _ACTION_VALUES
        if clashes:
            raise ValueError(
                f"State names collide with action ids: {sorted(clashes)}"
            )

        for state in self.states:
            for token, target in state.inputs.items():
                if target not in known and target not in _ACTION_VALUES:
                    raise ValueError(
                        f"State {state.name!r}: input {token!r} maps to "
                        f"unknown target {target!r}"
                    )
            auto = state.metadata.auto_progress
            if auto is not None and auto not in known:
                raise ValueError(
                    f"State {state.name!r}: auto_progress target {auto!r} "
                    f"is not defined"
                )
        return self

    # -- queries -------------------------------------------------------------

    @property
    def state_names(self) -> frozenset[str]:
        return frozenset(s.name for s in self.states)

    def state(self, name: str) -> StateDefinition:
        for s in self.states:
            if s.name == name:
                return s
        raise KeyError(name)

    def resolve(self, target: str) -> str | ActionKind:
        """Classify an input-map value as a state name or an action."""
        if target in self.state_names:
            return target
        return ActionKind(target)
