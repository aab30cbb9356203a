"""Generic finite-state machine with an explicit adjacency table."""
from collections.abc import Collection, Mapping
from typing import Generic, Protocol, TypeVar

from slotgame.errors import ErrorCode, GameError

TState = TypeVar("TState")
TState_contra = TypeVar("TState_contra", contravariant=True)


class StateObserver(Protocol[TState_contra]):
    """Receives every successful transition."""

    def on_state_change(self, previous: TState_contra, new: TState_contra) -> None:
        ...


class FiniteStateMachine(Generic[TState]):
    """
    State holder that only moves along permitted edges.

    transition_to() checks the table, force_transition() bypasses it and is
    meant for error recovery. Observers run synchronously in registration
    order; their exceptions propagate to the caller.
    """

    def __init__(
        self,
        initial_state: TState,
        transitions: Mapping[TState, Collection[TState]],
    ):
        self._state = initial_state
        self._transitions: dict[TState, frozenset[TState]] = {
            state: frozenset(targets) for state, targets in transitions.items()
        }
        # dict keys: set semantics, insertion order kept
        self._observers: dict[StateObserver[TState], None] = {}

    @property
    def state(self) -> TState:
        return self._state

    def can_transition_to(self, target: TState) -> bool:
        return target in self._transitions.get(self._state, frozenset())

    def transition_to(self, target: TState) -> None:
        """Move to target or raise INVALID_TRANSITION, leaving state unchanged."""
        if not self.can_transition_to(target):
            raise GameError(
                ErrorCode.INVALID_TRANSITION,
                f"Invalid transition: {_name(self._state)} -> {_name(target)}",
            )
        self._move(target)

    def force_transition(self, target: TState) -> None:
        self._move(target)

    def subscribe(self, observer: StateObserver[TState]) -> None:
        self._observers.setdefault(observer, None)

    def unsubscribe(self, observer: StateObserver[TState]) -> None:
        self._observers.pop(observer, None)

    def _move(self, target: TState) -> None:
        previous = self._state
        self._state = target
        for observer in list(self._observers):
            observer.on_state_change(previous, target)


def _name(state: object) -> str:
    return str(getattr(state, "value", state))
