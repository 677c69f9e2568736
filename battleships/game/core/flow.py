"""Trigger-driven phase machine backing the session's battle flow."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

TState = TypeVar("TState")


@dataclass(frozen=True, slots=True)
class TransitionContext(Generic[TState]):
    """What a guard or hook sees for one candidate transition."""

    trigger: str
    source: TState
    target: TState


Guard: TypeAlias = Callable[[TransitionContext[TState]], bool]
EnterHook: TypeAlias = Callable[[TransitionContext[TState]], None]


@dataclass(frozen=True, slots=True)
class Transition(Generic[TState]):
    """Moves to `target` on `trigger`; `source=None` matches every state."""

    trigger: str
    source: TState | None
    target: TState
    guard: Guard[TState] | None = None
    on_enter: EnterHook[TState] | None = None

    def applies(self, state: TState) -> bool:
        return self.source is None or self.source == state


class PhaseMachine(Generic[TState]):
    """Runs the first applicable, unguarded-or-allowed transition for a trigger."""

    def __init__(self, initial: TState, transitions: Iterable[Transition[TState]] = ()) -> None:
        self._state = initial
        self._table: defaultdict[str, list[Transition[TState]]] = defaultdict(list)
        self._history: list[TransitionContext[TState]] = []
        for transition in transitions:
            self.register(transition)

    @property
    def state(self) -> TState:
        return self._state

    @property
    def history(self) -> tuple[TransitionContext[TState], ...]:
        """Transitions taken so far, oldest first."""
        return tuple(self._history)

    def register(self, transition: Transition[TState]) -> None:
        self._table[transition.trigger].append(transition)

    def allows(self, trigger: str) -> bool:
        return self._select(trigger) is not None

    def fire(self, trigger: str) -> TransitionContext[TState] | None:
        """Take the transition for `trigger`; None when nothing applies."""
        selected = self._select(trigger)
        if selected is None:
            return None
        transition, context = selected
        self._state = transition.target
        self._history.append(context)
        if transition.on_enter is not None:
            transition.on_enter(context)
        return context

    def _select(
        self, trigger: str
    ) -> tuple[Transition[TState], TransitionContext[TState]] | None:
        for transition in self._table.get(trigger, ()):
            if not transition.applies(self._state):
                continue
            context = TransitionContext(trigger, self._state, transition.target)
            if transition.guard is None or transition.guard(context):
                return transition, context
        return None
