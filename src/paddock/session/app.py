"""GameApp -- one running game: registry, navigation, session and bindings.

Construction order is fixed: content is loaded and validated, then the
navigation machine, the career session and the bindings are built and
wired together.  After that the app is driven from a single input loop::

    app = GameApp(seed=7)
    while app.running:
        app.handle_input(read_token())
        if (auto := app.machine.auto_progress()) is not None:
            wait(auto[1])
            app.tick()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from paddock.errors import ConfigurationError, PaddockError
from paddock.navigation.machine import DispatchKind, NavigationStateMachine
from paddock.session.bindings import ActionBindings, ActionResult
from paddock.session.career import CareerSession
from paddock.sim.content.registry import ContentRegistry
from paddock.sim.timeline import Timeline

if TYPE_CHECKING:
    from paddock.navigation.machine import TransitionResult
    from paddock.session.store import SessionStore
    from paddock.sim.race import RaceSimulator

logger = logging.getLogger(__name__)


class GameApp:
    """Wires the engine together and exposes the input loop entry points.

    Parameters
    ----------
    registry:
        Loaded content.  Defaults to the packaged JSON tables.
    store:
        Save-game store for the session.
    seed:
        Master RNG seed; ``None`` for an entropy seed.
    race_simulator:
        Career race simulator.
    render:
        Called with the app after every state change.
    strict:
        Raise :class:`ConfigurationError` when the content fails its
        integrity checks.  Otherwise the issues are only logged.
    """

    def __init__(
        self,
        registry: ContentRegistry | None = None,
        store: SessionStore | None = None,
        seed: int | None = None,
        race_simulator: RaceSimulator | None = None,
        render: Callable[[GameApp], None] | None = None,
        strict: bool = True,
    ) -> None:
        self.registry = registry or ContentRegistry.with_defaults()
        self.render = render
        self.running = True
        self.last_result: ActionResult | None = None

        self.machine = NavigationStateMachine(
            self.registry.navigation, on_change=self._on_change,
        )
        self.session = CareerSession(
            self.registry, store=store, seed=seed, race_simulator=race_simulator,
        )
        self.bindings = ActionBindings(self.session, self.machine)
        self.machine.on_action = self.bindings.handle

        issues = self.validate()
        if issues:
            if strict:
                raise ConfigurationError(issues)
            for issue in issues:
                logger.warning("Configuration issue: %s", issue)

    # ------------------------------------------------------------------
    # Input loop
    # ------------------------------------------------------------------

    def handle_input(self, token: str | None) -> ActionResult:
        """Feed one input token through the machine.

        Never raises :class:`PaddockError`: a rejected token comes back as
        ``success=False`` and the current state is unchanged.
        """
        try:
            dispatched = self.machine.dispatch(token)
        except PaddockError as exc:
            result = ActionResult(success=False, error=str(exc))
        else:
            if dispatched.kind is DispatchKind.ACTION:
                result = dispatched.outcome
            elif dispatched.kind is DispatchKind.TEXT:
                result = ActionResult(success=True, data={"text": dispatched.text})
            else:
                result = ActionResult(
                    success=True,
                    next_state=dispatched.state,
                    data={"transition": dispatched.transition},
                )
            if result.data.get("quit"):
                self.running = False

        self.last_result = result
        return result

    def tick(self) -> TransitionResult | None:
        """Perform the current state's auto-progress transition, if any.

        The caller owns the clock: wait ``machine.auto_progress()[1]``
        milliseconds first.
        """
        return self.machine.advance()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def state(self) -> str:
        return self.machine.current_state

    def screen(self) -> dict[str, Any]:
        """Everything a renderer needs for the current screen."""
        view: dict[str, Any] = {
            "state": self.state,
            "help": self.machine.help_text(),
            "text": self.machine.text_buffer,
        }
        session = self.session
        if session.has_character:
            view["character"] = session.active_character.summary()
            view["stats"] = session.active_character.stats.model_dump()
            view["upcoming"] = session.upcoming_race()
            view["pending_race"] = session.pending_race
            view["recommendations"] = session.recommendations()
            view["progress"] = session.progress()
            view["outcome"] = session.last_outcome
        if self.state == "load":
            view["saves"] = session.store.list_saves()
        return view

    def validate(self) -> list[str]:
        """Integrity issues across the navigation graph and every schedule."""
        issues = list(self.machine.validate())
        for schedule_id in self.registry.list_schedule_ids():
            timeline = Timeline(self.registry.get_schedule(schedule_id))
            issues.extend(f"Schedule {schedule_id}: {i}" for i in timeline.validate())
        return issues

    def _on_change(self) -> None:
        if self.render is not None:
            self.render(self)
