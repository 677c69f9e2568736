"""Medium AI: random hunting, then probing the neighbours of each hit."""

from __future__ import annotations

import random

from battleships.game.ai.strategy import AIStrategy
from battleships.game.core.models import BOARD_SIZE, AttackOutcome, AttackResult, Coord


class HuntTargetAI(AIStrategy):
    """Searches at random until a hit, then drains a stack of neighbouring targets."""

    def __init__(self, rng: random.Random, size: int = BOARD_SIZE) -> None:
        super().__init__(rng, size)
        self._targets: list[Coord] = []

    @property
    def is_targeting(self) -> bool:
        return any(self.is_untried(coord.row, coord.col) for coord in self._targets)

    def next_target(self) -> Coord:
        while self._targets:
            coord = self._targets.pop()
            if self.is_untried(coord.row, coord.col):
                return coord
        return self._random_untried()

    def notify_result(self, result: AttackResult) -> None:
        coord = result.coord
        self._mark_tried(coord)
        if result.outcome is AttackOutcome.HIT:
            # Last hit's neighbours go on top so they are tried first.
            self._targets.extend(reversed(self._neighbours(coord)))
