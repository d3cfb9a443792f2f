"""NavigationStateMachine -- legal screen transitions and input routing.

The machine pairs an immutable :class:`NavigationConfig` (loaded once)
with a small mutable cursor: the current state, a history stack (most
recent last) and a free-text buffer.  It never touches the character or
any simulation state.

Input flow::

    token -> current state's input map
          -> state name   : attempt_transition()
          -> ActionKind   : on_action(CustomAction)   (domain bindings)
          -> unmapped     : free-text buffer, or InvalidInput

Every accepted transition calls the ``on_change`` callback exactly once;
that is the only hook renderers need.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from paddock.errors import InvalidInput, InvalidTransition, NoHistory
from paddock.ir.navigation import NavigationConfig, StateDefinition, StateMetadata
from paddock.ir.training import ActionKind

logger = logging.getLogger(__name__)

_ENTER_ALIASES = frozenset({"", "enter"})


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------

@dataclass
class TransitionResult:
    """Outcome of a transition attempt.

    ``ignored`` is set for a self-transition: it succeeds, but history is
    untouched and no notification fires.
    """

    source: str
    target: str
    ignored: bool = False
    back: bool = False


@dataclass
class CustomAction:
    """A named action emitted by :meth:`NavigationStateMachine.dispatch`.

    Attributes
    ----------
    action:
        The action identifier from the input map.
    raw_input:
        The token exactly as received.
    text:
        Free text accumulated in the current state (e.g. a typed name).
    state:
        State the machine was in when the action fired.
    """

    action: ActionKind
    raw_input: str
    text: str
    state: str
    context: dict[str, Any] = field(default_factory=dict)


class DispatchKind(str, Enum):
    TRANSITION = "transition"
    ACTION = "action"
    TEXT = "text"


@dataclass
class DispatchResult:
    """What :meth:`NavigationStateMachine.dispatch` did with a token.

    ``outcome`` is whatever the ``on_action`` handler returned for an
    action dispatch.
    """

    kind: DispatchKind
    state: str
    """Current state after the dispatch (and any follow-up transitions)."""

    transition: TransitionResult | None = None
    action: ActionKind | None = None
    outcome: Any = None
    text: str | None = None


# ---------------------------------------------------------------------------
# NavigationStateMachine
# ---------------------------------------------------------------------------

class NavigationStateMachine:
    """Generic state machine over a static navigation graph.

    Parameters
    ----------
    config:
        The navigation graph.  Never mutated.
    on_change:
        No-argument callback fired after every accepted state change.
    on_action:
        Receives every :class:`CustomAction`; its return value is passed
        back in :attr:`DispatchResult.outcome`.  May be set after
        construction (the bindings need the machine first).
    initial:
        Starting state.  Defaults to ``config.initial``.
    """

    def __init__(
        self,
        config: NavigationConfig,
        on_change: Callable[[], None] | None = None,
        on_action: Callable[[CustomAction], Any] | None = None,
        initial: str | None = None,
    ) -> None:
        self._config = config
        self._states: dict[str, StateDefinition] = {s.name: s for s in config.states}
        self.on_change = on_change
        self.on_action = on_action

        start = initial or config.initial
        if start not in self._states:
            raise KeyError(f"Unknown initial state {start!r}")
        self._current = start
        self._history: list[str] = [start]
        self._text_buffer = ""
        self.last_context: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @property
    def current_state(self) -> str:
        return self._current

    @property
    def history(self) -> list[str]:
        """Copy of the history stack, oldest first, current state last."""
        return list(self._history)

    @property
    def text_buffer(self) -> str:
        return self._text_buffer

    def clear_text(self) -> None:
        self._text_buffer = ""

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def can_transition_to(self, target: str) -> bool:
        return target == self._current or target in self._states[self._current].transitions

    def attempt_transition(
        self,
        target: str,
        context: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """Move to *target* if the current state allows it.

        A self-transition succeeds as ``ignored``.  Anything else not in
        the allowed set raises :class:`InvalidTransition` and leaves the
        machine unchanged.
        """
        source = self._current
        if target == source:
            logger.debug("Ignoring duplicate transition to %s", target)
            return TransitionResult(source=source, target=target, ignored=True)

        allowed = self._states[source].transitions
        if target not in allowed:
            raise InvalidTransition(source, target, allowed)

        self._history.append(target)
        self._enter(target, context or {})
        return TransitionResult(source=source, target=target)

    def go_back(self) -> TransitionResult:
        """Pop the current state off history and return to the one below.

        Raises :class:`NoHistory` when there is nothing to return to.
        """
        if len(self._history) < 2:
            raise NoHistory()
        source = self._history.pop()
        target = self._history[-1]
        self._enter(target, {"back": True})
        return TransitionResult(source=source, target=target, back=True)

    def reset(self, initial: str | None = None) -> None:
        """Jump to *initial* (default: the configured initial state) and
        clear history."""
        start = initial or self._config.initial
        if start not in self._states:
            raise KeyError(f"Unknown state {start!r}")
        self._current = start
        self._history = [start]
        self._text_buffer = ""
        self._notify()

    def auto_progress(self) -> tuple[str, int] | None:
        """``(target, delay_ms)`` if the current state advances by itself."""
        meta = self.metadata()
        if meta.auto_progress is None:
            return None
        return meta.auto_progress, meta.auto_progress_ms

    def advance(self) -> TransitionResult | None:
        """Perform the current state's auto-progress transition, if any.

        Callers are expected to have waited ``delay_ms`` first.
        """
        auto = self.auto_progress()
        if auto is None:
            return None
        return self.attempt_transition(auto[0], {"auto": True})

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def dispatch(
        self,
        token: str | None,
        context: dict[str, Any] | None = None,
    ) -> DispatchResult:
        """Route one input token from the current state.

        Raises :class:`InvalidInput` for an unmapped token in a state that
        does not accept free text; the machine is left unchanged.
        """
        raw = token or ""
        key = self.normalize_input(raw)
        state = self._states[self._current]
        meta = state.metadata

        if meta.accepts_free_text and raw and not raw.strip():
            # Whitespace typed into a text field is text, not ENTER.
            return self._accumulate(raw)

        target = state.inputs.get(key)
        if target is None or (key == "" and not meta.accepts_empty):
            if meta.accepts_free_text and key != "":
                return self._accumulate(raw)
            raise InvalidInput(self._current, raw, self.available_inputs())

        resolved = self._config.resolve(target)
        if isinstance(resolved, ActionKind):
            return self._emit(resolved, raw, context or {})

        transition = self.attempt_transition(resolved, context)
        return DispatchResult(
            kind=DispatchKind.TRANSITION,
            state=self._current,
            transition=transition,
        )

    @staticmethod
    def normalize_input(token: str) -> str:
        key = token.strip().lower()
        return "" if key in _ENTER_ALIASES else key

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def config(self) -> NavigationConfig:
        return self._config

    def metadata(self, state: str | None = None) -> StateMetadata:
        return self._states[state or self._current].metadata

    def available_transitions(self) -> list[str]:
        return sorted(self._states[self._current].transitions)

    def available_inputs(self) -> list[str]:
        return list(self._states[self._current].inputs)

    def help_text(self) -> str:
        meta = self.metadata()
        lines = [meta.description or f"In {self._current} state"]
        if meta.accepts_empty:
            lines.append("Press ENTER to continue")
        inputs = [i for i in self.available_inputs() if i]
        if inputs:
            lines.append(f"Available inputs: {', '.join(inputs)}")
        if meta.accepts_free_text:
            lines.append("Type text, then press ENTER to submit")
        if meta.back_enabled:
            lines.append("Press B or Q to go back")
        return "\n".join(lines)

    def find_path(self, source: str, target: str) -> list[str] | None:
        """Shortest list of states from *source* to *target* (BFS)."""
        if source == target:
            return [source]
        queue: deque[list[str]] = deque([[source]])
        visited = {source}
        while queue:
            path = queue.popleft()
            state = self._states.get(path[-1])
            if state is None:
                continue
            for neighbour in sorted(state.transitions):
                if neighbour == target:
                    return path + [neighbour]
                if neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(path + [neighbour])
        return None

    def validate(self) -> list[str]:
        """Integrity check over the whole graph.

        Reports (never raises) unreachable states, non-terminal dead ends,
        transitions to undefined states, and input or auto-progress targets
        the state is not allowed to reach.  Run once at startup.
        """
        issues: list[str] = []
        known = set(self._states)

        reachable = {self._config.initial}
        frontier = [self._config.initial]
        while frontier:
            state = self._states.get(frontier.pop())
            if state is None:
                continue
            for target in state.transitions:
                if target not in reachable:
                    reachable.add(target)
                    frontier.append(target)

        for state in self._config.states:
            name = state.name
            if name not in reachable:
                issues.append(f"State {name} is unreachable")
            if not state.transitions and not state.metadata.terminal:
                issues.append(f"State {name} is a dead end")
            for target in sorted(state.transitions - known):
                issues.append(f"State {name} transitions to undefined state {target}")
            for token, target in state.inputs.items():
                if (
                    target in known
                    and target != name
                    and target not in state.transitions
                ):
                    issues.append(
                        f"State {name}: input {token!r} targets {target}, "
                        f"which is not an allowed transition"
                    )
            auto = state.metadata.auto_progress
            if auto is not None and auto not in state.transitions:
                issues.append(
                    f"State {name}: auto-progress target {auto} "
                    f"is not an allowed transition"
                )

        return issues

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _enter(self, target: str, context: dict[str, Any]) -> None:
        logger.debug("State %s -> %s", self._current, target)
        self._current = target
        self._text_buffer = ""
        self.last_context = context
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _accumulate(self, raw: str) -> DispatchResult:
        self._text_buffer += raw
        return DispatchResult(
            kind=DispatchKind.TEXT,
            state=self._current,
            text=self._text_buffer,
        )

    def _emit(
        self,
        action: ActionKind,
        raw: str,
        context: dict[str, Any],
    ) -> DispatchResult:
        custom = CustomAction(
            action=action,
            raw_input=raw,
            text=self._text_buffer,
            state=self._current,
            context=context,
        )
        outcome = None
        if self.on_action is not None:
            outcome = self.on_action(custom)
        else:
            logger.warning("Action %s dispatched with no handler", action.value)
        # Submitted text is spent, whether or not the handler accepted it.
        self._text_buffer = ""
        return DispatchResult(
            kind=DispatchKind.ACTION,
            state=self._current,
            action=action,
            outcome=outcome,
        )
