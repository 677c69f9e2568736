"""AI strategy contract shared by every difficulty."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from battleships.game.core.errors import TargetingExhausted
from battleships.game.core.models import BOARD_SIZE, AttackResult, Coord


class AIStrategy(ABC):
    """Chooses attack cells from the AI's own record of earlier results.

    A strategy never sees the opponent grid. It learns only what `notify_result`
    reports: hit or miss per cell, and the ship name once a ship is destroyed.
    """

    def __init__(self, rng: random.Random, size: int = BOARD_SIZE) -> None:
        self._rng = rng
        self._size = size
        self._remaining: set[tuple[int, int]] = {(r, c) for r in range(size) for c in range(size)}

    @property
    def size(self) -> int:
        return self._size

    @property
    def untried(self) -> int:
        return len(self._remaining)

    def is_untried(self, row: int, col: int) -> bool:
        return (row, col) in self._remaining

    @abstractmethod
    def next_target(self) -> Coord:
        """Return next coordinate to attack."""

    @abstractmethod
    def notify_result(self, result: AttackResult) -> None:
        """Update strategy state with an attack result."""

    def _mark_tried(self, coord: Coord) -> None:
        self._remaining.discard((coord.row, coord.col))

    def _random_untried(self) -> Coord:
        if not self._remaining:
            raise TargetingExhausted("no untried cell left to attack")
        row, col = self._rng.choice(sorted(self._remaining))
        return Coord(row, col)

    def _neighbours(self, coord: Coord) -> list[Coord]:
        """Untried orthogonal neighbours of a cell."""
        candidates = (
            Coord(coord.row - 1, coord.col),
            Coord(coord.row + 1, coord.col),
            Coord(coord.row, coord.col - 1),
            Coord(coord.row, coord.col + 1),
        )
        return [cell for cell in candidates if (cell.row, cell.col) in self._remaining]
