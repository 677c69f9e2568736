"""Application controller for game lifecycle, screen states and attacks."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from battleships.game.ai.factory import build_ai_strategy, resolve_difficulty
from battleships.game.app.state_stack import GameStateStack
from battleships.game.core.errors import InvalidTransition
from battleships.game.core.events import OutcomeSink
from battleships.game.core.models import (
    BOARD_SIZE,
    AttackResult,
    Coord,
    Difficulty,
    GameState,
    Orientation,
    Phase,
    ShipName,
    Side,
)
from battleships.game.core.player import Player
from battleships.game.core.session import GameSession, TurnReport
from battleships.game.core.ship import Ship

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameSummary:
    """Data an external high-score recorder needs once a game ends."""

    won: bool
    difficulty: Difficulty
    score: int
    shots: int
    hits: int


class GameController:
    """Entry points used by menu, deployment and battle screens."""

    def __init__(
        self,
        rng: random.Random,
        *,
        difficulty: Difficulty | str | None = None,
        board_size: int = BOARD_SIZE,
        sink: OutcomeSink | None = None,
    ) -> None:
        self._rng = rng
        self._difficulty = resolve_difficulty(difficulty)
        self._board_size = board_size
        self._sink = sink
        self._states = GameStateStack()
        self._session: GameSession | None = None
        self.status = ""

    @property
    def state_stack(self) -> GameStateStack:
        return self._states

    @property
    def current_state(self) -> GameState:
        return self._states.current

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def session(self) -> GameSession | None:
        return self._session

    @property
    def human_player(self) -> Player:
        return self._require_session().human

    @property
    def computer_player(self) -> Player:
        return self._require_session().computer

    def set_difficulty(self, level: Difficulty | str | None) -> None:
        """Set the difficulty used by the next started game."""
        self._difficulty = resolve_difficulty(level)
        logger.info("difficulty_set level=%s", self._difficulty.value)

    def start_game(self) -> GameSession:
        """Start a new game, abandoning the current one, and enter deployment."""
        if self._session is not None:
            self.end_game()

        human = Player("Human", self._board_size)
        computer = Player("Computer", self._board_size)
        computer.randomize_deployment(self._rng)
        strategy = build_ai_strategy(self._difficulty, self._rng, self._board_size)
        self._session = GameSession(human, computer, strategy, self._difficulty)
        logger.info("game_started difficulty=%s size=%d", self._difficulty.value, self._board_size)
        self.push_state(GameState.DEPLOYING)
        return self._session

    def place_ship(self, name: ShipName, start: Coord, orientation: Orientation) -> Ship:
        """Place or move one of the human's ships during deployment."""
        session = self._require_phase(Phase.DEPLOYING)
        return session.human.place_ship(name, start, orientation)

    def randomize_deployment(self) -> None:
        """Deploy the human fleet at random."""
        session = self._require_phase(Phase.DEPLOYING)
        session.human.randomize_deployment(self._rng)

    def end_deployment(self) -> None:
        """Complete deployment and switch to the battle screen."""
        self._require_session().end_deployment()
        self.switch_state(GameState.DISCOVERING)

    def attack(self, row: int, col: int) -> TurnReport:
        """Attack the computer's grid; the AI replies within the same call after a miss."""
        report = self._require_session().attack(row, col, sink=self._sink)
        for result in report.results:
            self.status = self._describe(result)
        if report.phase is Phase.GAME_OVER:
            self.switch_state(GameState.ENDING_GAME)
        return report

    def end_game(self) -> None:
        """Abandon the current game, if any."""
        if self._session is None:
            return
        self._session.abandon()
        self._session = None
        logger.info("game_ended")

    def summary(self) -> GameSummary:
        """Return win/loss, difficulty and score of the finished game."""
        session = self._require_session()
        if session.phase is not Phase.GAME_OVER:
            raise InvalidTransition("the game is not over yet")
        return GameSummary(
            won=session.winner is Side.HUMAN,
            difficulty=session.difficulty,
            score=session.human.score,
            shots=session.human.shots,
            hits=session.human.hits,
        )

    def push_state(self, state: GameState) -> None:
        """Move to a new screen, keeping the current one to return to."""
        self._states.push(state)
        self.status = ""

    def switch_state(self, state: GameState) -> None:
        """End the current screen and move to a new one."""
        self._states.switch(state)
        self.status = ""

    def pop_state(self) -> GameState:
        """End the current screen, returning to the previous one."""
        return self._states.pop()

    def _describe(self, result: AttackResult) -> str:
        who = "You" if result.attacker is Side.HUMAN else "The AI"
        return f"{who} {result.text}"

    def _require_session(self) -> GameSession:
        if self._session is None:
            raise InvalidTransition("no game has been started")
        return self._session

    def _require_phase(self, phase: Phase) -> GameSession:
        session = self._require_session()
        if session.phase is not phase:
            raise InvalidTransition(f"expected phase {phase.value}, got {session.phase.value}")
        return session
