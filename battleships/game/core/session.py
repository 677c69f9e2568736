"""Battle session: deployment, alternating attacks and game over."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NoReturn

from battleships.game.ai.strategy import AIStrategy
from battleships.game.core.errors import InvalidTransition, TargetingExhausted
from battleships.game.core.events import OutcomeSink
from battleships.game.core.flow import PhaseMachine, Transition, TransitionContext
from battleships.game.core.models import AttackOutcome, AttackResult, Difficulty, Phase, Side
from battleships.game.core.player import Player
from battleships.game.core.resolver import resolve_attack

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TurnReport:
    """Outcome of a full player action (player attack + optional AI response)."""

    player: AttackResult
    ai: AttackResult | None
    phase: Phase
    winner: Side | None

    @property
    def results(self) -> tuple[AttackResult, ...]:
        if self.ai is None:
            return (self.player,)
        return (self.player, self.ai)


class GameSession:
    """Two players, whose turn it is, and the Deploying -> Battle -> GameOver flow."""

    def __init__(
        self,
        human: Player,
        computer: Player,
        strategy: AIStrategy,
        difficulty: Difficulty = Difficulty.HARD,
    ) -> None:
        if human is computer or human.grid is computer.grid:
            raise ValueError("players must not share a grid")
        if strategy.size != human.grid.size:
            raise ValueError("AI strategy size does not match the human grid")
        self.human = human
        self.computer = computer
        self.strategy = strategy
        self.difficulty = difficulty
        self.turn = Side.HUMAN
        self.winner: Side | None = None
        self.abandoned = False
        self.history: list[AttackResult] = []
        self._flow: PhaseMachine[Phase] = PhaseMachine(
            Phase.DEPLOYING,
            (
                Transition(
                    trigger="end_deployment",
                    source=Phase.DEPLOYING,
                    target=Phase.BATTLE,
                    guard=self._fleets_deployed,
                    on_enter=self._log_phase,
                ),
                Transition(
                    trigger="game_over",
                    source=Phase.BATTLE,
                    target=Phase.GAME_OVER,
                    on_enter=self._log_phase,
                ),
                Transition(
                    trigger="abandon",
                    source=None,
                    target=Phase.GAME_OVER,
                    on_enter=self._log_phase,
                ),
            ),
        )

    @property
    def phase(self) -> Phase:
        return self._flow.state

    @property
    def is_over(self) -> bool:
        return self._flow.state is Phase.GAME_OVER

    def player(self, side: Side) -> Player:
        return self.human if side is Side.HUMAN else self.computer

    def end_deployment(self) -> None:
        """Start the battle once both fleets are fully deployed."""
        if self._flow.fire("end_deployment") is None:
            missing = self.human.missing_ships if self.phase is Phase.DEPLOYING else []
            detail = f" missing={','.join(name.value for name in missing)}" if missing else ""
            self._reject(f"cannot end deployment in phase {self.phase.value}{detail}")
        self.turn = Side.HUMAN

    def attack(self, row: int, col: int, sink: OutcomeSink | None = None) -> TurnReport:
        """Resolve the human's attack and, after a miss, the AI's single reply."""
        self._require_turn(Side.HUMAN)
        result = self._fire(Side.HUMAN, row, col, sink)
        ai_result: AttackResult | None = None
        if result.outcome is AttackOutcome.MISS and not self.is_over:
            self.turn = Side.AI
            ai_result = self.ai_attack(sink)
        return TurnReport(player=result, ai=ai_result, phase=self.phase, winner=self.winner)

    def ai_attack(self, sink: OutcomeSink | None = None) -> AttackResult:
        """Let the AI attack exactly once, then hand the turn back."""
        self._require_turn(Side.AI)
        target = self.strategy.next_target()
        result = self._fire(Side.AI, target.row, target.col, sink)
        if result.outcome is AttackOutcome.SHOT_ALREADY:
            raise TargetingExhausted(f"AI repeated an attack at ({target.row}, {target.col})")
        self.strategy.notify_result(result)
        if not self.is_over:
            self.turn = Side.HUMAN
        return result

    def abandon(self) -> None:
        """End the session early; no further attacks are accepted."""
        if self.is_over:
            return
        self.abandoned = True
        self._flow.fire("abandon")

    def _fire(self, attacker: Side, row: int, col: int, sink: OutcomeSink | None) -> AttackResult:
        defender_side = attacker.opponent
        result = resolve_attack(self.player(defender_side), row, col, attacker=attacker)
        self.player(attacker).record_shot(result.outcome)
        if result.outcome.mutates_grid:
            self.history.append(result)
        if sink is not None:
            sink.on_attack(result)
            if result.outcome.mutates_grid:
                sink.on_grid_changed(defender_side)
        if result.outcome is AttackOutcome.GAME_OVER:
            self.winner = attacker
            self._flow.fire("game_over")
            logger.info(
                "game_over winner=%s shots=%d hits=%d",
                attacker.value,
                self.player(attacker).shots,
                self.player(attacker).hits,
            )
        return result

    def _require_turn(self, side: Side) -> None:
        if self.phase is not Phase.BATTLE:
            self._reject(f"cannot attack in phase {self.phase.value}")
        if self.turn is not side:
            self._reject(f"it is not the {side.value} turn")

    def _fleets_deployed(self, context: TransitionContext[Phase]) -> bool:
        _ = context
        return self.human.is_deployed and self.computer.is_deployed

    @staticmethod
    def _log_phase(context: TransitionContext[Phase]) -> None:
        logger.info(
            "session_phase trigger=%s from=%s to=%s",
            context.trigger,
            context.source.value,
            context.target.value,
        )

    @staticmethod
    def _reject(message: str) -> NoReturn:
        logger.warning("invalid_transition %s", message)
        raise InvalidTransition(message)
