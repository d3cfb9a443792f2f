"""Screen navigation: the state machine over the static navigation graph."""

from paddock.navigation.machine import (
    CustomAction,
    DispatchKind,
    DispatchResult,
    NavigationStateMachine,
    TransitionResult,
)

__all__ = [
    "CustomAction",
    "DispatchKind",
    "DispatchResult",
    "NavigationStateMachine",
    "TransitionResult",
]
