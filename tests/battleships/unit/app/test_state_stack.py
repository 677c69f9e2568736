import pytest

from battleships.game.app.state_stack import GameStateStack
from battleships.game.core.errors import InvalidTransition
from battleships.game.core.models import GameState


def test_stack_starts_with_sentinel_below_main_menu() -> None:
    stack = GameStateStack()
    assert stack.states() == (GameState.QUITTING, GameState.VIEWING_MAIN_MENU)
    assert stack.current is GameState.VIEWING_MAIN_MENU
    assert stack.peek() is GameState.VIEWING_MAIN_MENU
    assert not stack.is_quitting


def test_push_pop_and_switch() -> None:
    stack = GameStateStack()
    stack.push(GameState.ALTERING_SETTINGS)
    assert stack.current is GameState.ALTERING_SETTINGS
    assert stack.pop() is GameState.ALTERING_SETTINGS
    stack.push(GameState.DEPLOYING)
    assert stack.switch(GameState.DISCOVERING) is GameState.DEPLOYING
    assert stack.states()[-2:] == (GameState.VIEWING_MAIN_MENU, GameState.DISCOVERING)
    assert len(stack) == 3


def test_sentinel_is_never_popped() -> None:
    stack = GameStateStack()
    stack.pop()
    assert stack.is_quitting
    assert stack.current is GameState.QUITTING
    with pytest.raises(InvalidTransition):
        stack.pop()
    with pytest.raises(InvalidTransition):
        stack.switch(GameState.VIEWING_HELP)
    assert stack.states() == (GameState.QUITTING,)


def test_quitting_cannot_be_pushed() -> None:
    stack = GameStateStack()
    with pytest.raises(InvalidTransition):
        stack.push(GameState.QUITTING)


def test_rejected_switch_keeps_current_screen() -> None:
    stack = GameStateStack()
    stack.push(GameState.DEPLOYING)
    before = stack.states()
    with pytest.raises(InvalidTransition):
        stack.switch(GameState.QUITTING)
    assert stack.states() == before
    assert stack.current is GameState.DEPLOYING
