"""Screen-state stack with a permanent quitting sentinel at the bottom."""

from __future__ import annotations

import logging

from battleships.game.core.errors import InvalidTransition
from battleships.game.core.models import GameState

logger = logging.getLogger(__name__)


class GameStateStack:
    """Last-in-first-out navigation history of screen states.

    The bottom entry is always `GameState.QUITTING`; once it is the only entry left the
    caller should end the program.
    """

    def __init__(self, initial: GameState = GameState.VIEWING_MAIN_MENU) -> None:
        self._states: list[GameState] = [GameState.QUITTING]
        if initial is not GameState.QUITTING:
            self._states.append(initial)

    @property
    def current(self) -> GameState:
        """Return topmost state."""
        return self._states[-1]

    @property
    def is_quitting(self) -> bool:
        return len(self._states) == 1

    def peek(self) -> GameState:
        return self._states[-1]

    def push(self, state: GameState) -> None:
        """Push a state on top of the current one."""
        if state is GameState.QUITTING:
            raise InvalidTransition("the quitting state is only valid as the bottom entry")
        self._states.append(state)
        logger.debug("state_push state=%s depth=%d", state.name, len(self._states))

    def pop(self) -> GameState:
        """Pop topmost state; the sentinel is never removed."""
        if self.is_quitting:
            raise InvalidTransition("cannot pop the quitting sentinel")
        state = self._states.pop()
        logger.debug("state_pop state=%s current=%s", state.name, self.current.name)
        return state

    def switch(self, state: GameState) -> GameState:
        """Replace the current state. Returns the state that was replaced."""
        if state is GameState.QUITTING:
            raise InvalidTransition("the quitting state is only valid as the bottom entry")
        if self.is_quitting:
            raise InvalidTransition("cannot replace the quitting sentinel")
        previous = self._states[-1]
        self._states[-1] = state
        logger.debug("state_switch from=%s to=%s", previous.name, state.name)
        return previous

    def states(self) -> tuple[GameState, ...]:
        """Return bottom-first snapshot."""
        return tuple(self._states)

    def __len__(self) -> int:
        return len(self._states)
