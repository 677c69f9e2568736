"""Easy AI: uniformly random untried cells."""

from __future__ import annotations

from battleships.game.ai.strategy import AIStrategy
from battleships.game.core.models import AttackResult, Coord


class RandomShotAI(AIStrategy):
    def next_target(self) -> Coord:
        return self._random_untried()

    def notify_result(self, result: AttackResult) -> None:
        self._mark_tried(result.coord)
