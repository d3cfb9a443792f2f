"""ActionBindings -- the domain side of the navigation input maps.

The navigation graph routes some tokens to named actions instead of
states.  This module maps every :class:`ActionKind` to one handler that
talks to the :class:`CareerSession`, and interprets the handler's
:class:`ActionResult` into the follow-up transition:

===================  ======================================
result flag          next state
===================  ======================================
``race_ready``       ``pre_race`` (``tutorial_race`` in the tutorial)
``career_complete``  ``career_complete`` (``tutorial_complete``)
``next_state``       that state
===================  ======================================

Handlers never raise past :meth:`ActionBindings.handle`; every failure
comes back as ``success=False`` with the error message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from paddock.errors import PaddockError
from paddock.ir.training import TRAINING_ACTIONS, ActionKind

if TYPE_CHECKING:
    from paddock.navigation.machine import CustomAction, NavigationStateMachine
    from paddock.session.career import CareerSession

logger = logging.getLogger(__name__)

# Lineup keys -> racing strategy.  ENTER keeps the default.
STRATEGIES: dict[str, str] = {"1": "FRONT", "2": "MID", "3": "LATE"}
DEFAULT_STRATEGY = "MID"


@dataclass
class ActionResult:
    """Outcome of one bound action.

    Attributes
    ----------
    race_ready:
        The turn just entered has a scheduled race.
    career_complete:
        The career (or tutorial) has nothing left to play.
    next_state:
        Explicit follow-up state when neither flag applies.
    data:
        Handler-specific payload (turn result, race outcome, save ref...).
    """

    success: bool
    action: ActionKind | None = None
    error: str | None = None
    race_ready: bool = False
    career_complete: bool = False
    next_state: str | None = None
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)


Handler = Callable[["CustomAction"], ActionResult]


class ActionBindings:
    """Closed dispatch table from :class:`ActionKind` to session operations.

    Parameters
    ----------
    session:
        The career session every handler operates on.
    machine:
        The navigation machine follow-up transitions are applied to.
    """

    def __init__(self, session: CareerSession, machine: NavigationStateMachine) -> None:
        self.session = session
        self.machine = machine

        self._handlers: dict[ActionKind, Handler] = {
            ActionKind.SAVE_GAME: self._save_game,
            ActionKind.LOAD_GAME: self._load_game,
            ActionKind.SHOW_RACES: self._show_races,
            ActionKind.CREATE_CHARACTER: self._create_character,
            ActionKind.START_TUTORIAL: self._start_tutorial,
            ActionKind.NEW_CAREER: self._new_career,
            ActionKind.QUIT: self._quit,
            ActionKind.START_RACE: self._start_race,
            ActionKind.CONTINUE_CAREER: self._continue_career,
            ActionKind.GO_BACK: self._go_back,
        }
        for kind in TRAINING_ACTIONS:
            self._handlers[kind] = self._train

        unbound = [k.value for k in ActionKind if k not in self._handlers]
        if unbound:
            logger.warning("Actions with no handler: %s", ", ".join(unbound))

    @property
    def bound_actions(self) -> frozenset[ActionKind]:
        return frozenset(self._handlers)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(self, action: CustomAction) -> ActionResult:
        """Run the handler for *action* and apply its follow-up transition.

        Unknown action identifiers are a soft failure: logged and reported
        in the result, never raised.
        """
        try:
            kind = ActionKind(action.action)
        except ValueError:
            logger.warning("Unknown action %r from state %s", action.action, action.state)
            return ActionResult(success=False, error=f"Unknown action: {action.action}")

        handler = self._handlers.get(kind)
        if handler is None:
            logger.warning("No handler bound for action %s", kind.value)
            return ActionResult(
                success=False, action=kind, error=f"Action not available: {kind.value}",
            )

        try:
            result = handler(action)
        except PaddockError as exc:
            result = ActionResult(success=False, error=str(exc))
        except Exception as exc:
            logger.exception("Handler for %s failed", kind.value)
            result = ActionResult(success=False, error=str(exc))
        result.action = kind

        if result.success:
            self._follow(result)
        return result

    def _follow(self, result: ActionResult) -> None:
        target = self.follow_up_state(result)
        if target is None:
            return
        try:
            self.machine.attempt_transition(target, {"action": result.action})
        except PaddockError as exc:
            logger.warning("Follow-up transition failed: %s", exc)
            result.success = False
            result.error = str(exc)

    def follow_up_state(self, result: ActionResult) -> str | None:
        """The state *result* asks the machine to move to, if any."""
        tutorial = self.session.is_tutorial
        if result.race_ready:
            return "tutorial_race" if tutorial else "pre_race"
        if result.career_complete:
            return "tutorial_complete" if tutorial else "career_complete"
        return result.next_state

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def _train(self, action: CustomAction) -> ActionResult:
        turn = self.session.train(TRAINING_ACTIONS[ActionKind(action.action)])
        result = ActionResult(
            success=True,
            race_ready=turn.race_triggered,
            career_complete=turn.career_complete and not turn.race_triggered,
            message=turn.message,
            data={"turn": turn},
        )
        if turn.race_triggered and self.session.is_tutorial:
            # The tutorial race has a scripted result and no lineup screen.
            result.data["outcome"] = self.session.run_race()
        return result

    # ------------------------------------------------------------------
    # Session management
    # ------------------------------------------------------------------

    def _create_character(self, action: CustomAction) -> ActionResult:
        character = self.session.create_character(action.text)
        return ActionResult(
            success=True,
            next_state="training",
            message=f"Welcome, {character.name}!",
            data={"character": character.summary()},
        )

    def _start_tutorial(self, action: CustomAction) -> ActionResult:
        character = self.session.start_tutorial()
        return ActionResult(
            success=True,
            next_state="tutorial",
            data={"character": character.summary()},
        )

    def _save_game(self, action: CustomAction) -> ActionResult:
        saved = self.session.save()
        return ActionResult(
            success=saved["success"],
            message=f"Game saved: {saved['data']['ref']}",
            data=saved["data"],
        )

    def _load_game(self, action: CustomAction) -> ActionResult:
        ref = action.text.strip() or self.session.latest_save()
        if ref is None:
            return ActionResult(success=False, error="No save files found")
        loaded = self.session.load(ref)
        if not loaded["success"]:
            return ActionResult(success=False, error=loaded["error"])
        return ActionResult(
            success=True,
            next_state="training",
            message=f"Loaded {ref}",
            data={"ref": ref, "turn": loaded["turn"]},
        )

    def _show_races(self, action: CustomAction) -> ActionResult:
        return ActionResult(
            success=True,
            data={
                "races": self.session.timeline.summary(),
                "upcoming": self.session.upcoming_race(),
            },
        )

    def _new_career(self, action: CustomAction) -> ActionResult:
        self.session.reset()
        return ActionResult(success=True, next_state="menu")

    def _quit(self, action: CustomAction) -> ActionResult:
        return ActionResult(success=True, message="Goodbye!", data={"quit": True})

    def _go_back(self, action: CustomAction) -> ActionResult:
        transition = self.machine.go_back()
        return ActionResult(success=True, data={"transition": transition})

    # ------------------------------------------------------------------
    # Race day
    # ------------------------------------------------------------------

    def _start_race(self, action: CustomAction) -> ActionResult:
        strategy = STRATEGIES.get(action.raw_input.strip(), DEFAULT_STRATEGY)
        outcome = self.session.run_race(strategy)
        return ActionResult(
            success=True,
            next_state="race_running",
            data={"outcome": outcome},
        )

    def _continue_career(self, action: CustomAction) -> ActionResult:
        if self.session.is_career_complete:
            return ActionResult(success=True, career_complete=True)
        return ActionResult(success=True, next_state="training")
