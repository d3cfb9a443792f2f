"""Typed error taxonomy for the career engine.

Every error here is locally recoverable: the component that raises it
leaves its own state exactly as it was before the call.  The session
layer catches :class:`PaddockError` and reports it instead of crashing.
"""

from __future__ import annotations

from typing import Iterable


class PaddockError(Exception):
    """Base class for all recoverable engine errors."""


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

class InvalidTransition(PaddockError):
    """A transition was requested that the current state does not allow."""

    def __init__(self, source: str, target: str, allowed: Iterable[str]) -> None:
        self.source = source
        self.target = target
        self.allowed = sorted(allowed)
        super().__init__(
            f"Invalid transition: {source} -> {target}. "
            f"Valid transitions from {source}: {', '.join(self.allowed) or '(none)'}"
        )


class InvalidInput(PaddockError):
    """An input token has no mapping in a state that rejects free text."""

    def __init__(self, state: str, token: str, available: Iterable[str]) -> None:
        self.state = state
        self.token = token
        self.available = sorted(available)
        super().__init__(
            f"Invalid input {token!r} for state {state}. "
            f"Available inputs: {', '.join(repr(a) for a in self.available)}"
        )


class NoHistory(PaddockError):
    """``go_back`` was called with nothing to go back to."""

    def __init__(self) -> None:
        super().__init__("No previous state to return to")


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------

class InvalidActionKind(PaddockError):
    """The requested training action does not exist."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Invalid training type: {kind}")


class InsufficientEnergy(PaddockError):
    """The character cannot afford the energy cost of an action."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient energy. Required: {required}, Available: {available}"
        )


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class NoActiveCharacter(PaddockError):
    """A character-level operation was requested before setup completed."""

    def __init__(self) -> None:
        super().__init__("No active character. Please create a new character.")


class InvalidCharacterName(PaddockError):
    """Character names must be non-empty after trimming."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("Character name must be a non-empty string")


class NoPendingRace(PaddockError):
    """A race was started when no scheduled race is waiting to be run."""

    def __init__(self, turn: int) -> None:
        self.turn = turn
        super().__init__(f"No race is waiting to be run on turn {turn}")


class RacePending(PaddockError):
    """A turn was requested while a triggered race has not been run yet."""

    def __init__(self, race: str) -> None:
        self.race = race
        super().__init__(f"{race} must be run before training continues")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class ConfigurationError(PaddockError):
    """Static content failed an integrity check at startup."""

    def __init__(self, issues: Iterable[str]) -> None:
        self.issues = list(issues)
        super().__init__(
            "Invalid configuration:\n" + "\n".join(f"  - {i}" for i in self.issues)
        )
