"""Session layer: career session, save stores, action bindings and the app."""

from paddock.session.app import GameApp
from paddock.session.bindings import ActionBindings, ActionResult
from paddock.session.career import CareerSession
from paddock.session.store import (
    JsonFileSessionStore,
    MemorySessionStore,
    SaveSnapshot,
    SessionStore,
)

__all__ = [
    "ActionBindings",
    "ActionResult",
    "CareerSession",
    "GameApp",
    "JsonFileSessionStore",
    "MemorySessionStore",
    "SaveSnapshot",
    "SessionStore",
]
