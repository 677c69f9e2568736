"""Player fleet deployment, attack bookkeeping and scoring."""

from __future__ import annotations

import logging
import random

from battleships.game.core.grid import Grid
from battleships.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    AttackOutcome,
    Coord,
    Orientation,
    ShipName,
    ShipPlacement,
)
from battleships.game.core.ship import Ship

logger = logging.getLogger(__name__)


class Player:
    """Owns one grid, the standard fleet deployed on it and the player's shot counters."""

    def __init__(self, name: str = "Player", size: int = BOARD_SIZE) -> None:
        self.name = name
        self._grid = Grid(size)
        self._fleet: tuple[ShipName, ...] = DEFAULT_FLEET
        self.shots = 0
        self.hits = 0
        self.missed = 0

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def fleet(self) -> tuple[ShipName, ...]:
        return self._fleet

    @property
    def ships(self) -> list[Ship]:
        """Deployed ships in fleet order."""
        return [ship for name in self._fleet if (ship := self._grid.ship(name)) is not None]

    @property
    def missing_ships(self) -> list[ShipName]:
        return [name for name in self._fleet if not self._grid.has_ship(name)]

    @property
    def is_deployed(self) -> bool:
        return not self.missing_ships

    @property
    def destroyed_count(self) -> int:
        return self._grid.ships_destroyed

    @property
    def is_destroyed(self) -> bool:
        return self.is_deployed and self.destroyed_count == len(self._fleet)

    @property
    def score(self) -> int:
        """Score offered to external high-score recording."""
        if self.is_destroyed:
            return 0
        return self.hits * 12 - self.shots - self.destroyed_count * 20

    def place_ship(self, name: ShipName, start: Coord, orientation: Orientation) -> Ship:
        """Place or relocate one ship of the fleet."""
        if name not in self._fleet:
            raise ValueError(f"{name.label} is not part of this fleet.")
        return self._grid.place_ship(name, start, orientation)

    def randomize_deployment(self, rng: random.Random) -> None:
        """Clear the grid and deploy the whole fleet at random valid positions."""
        for _ in range(400):
            self._grid.clear()
            if self._try_random_deployment(rng):
                logger.debug("random_deployment player=%s", self.name)
                return
        raise RuntimeError(f"Failed to generate a random deployment for {self.name}.")

    def record_shot(self, outcome: AttackOutcome) -> None:
        """Update shot counters for an attack this player made."""
        if outcome is AttackOutcome.SHOT_ALREADY:
            return
        self.shots += 1
        if outcome is AttackOutcome.MISS:
            self.missed += 1
        else:
            self.hits += 1

    def _try_random_deployment(self, rng: random.Random) -> bool:
        order = list(self._fleet)
        rng.shuffle(order)
        for name in order:
            candidates = self._candidate_placements(name)
            if not candidates:
                return False
            placement = rng.choice(candidates)
            self._grid.place_ship(placement.name, placement.start, placement.orientation)
        return True

    def _candidate_placements(self, name: ShipName) -> list[ShipPlacement]:
        size = self._grid.size
        candidates: list[ShipPlacement] = []
        for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
            max_row = size if orientation is Orientation.HORIZONTAL else size - name.size + 1
            max_col = size - name.size + 1 if orientation is Orientation.HORIZONTAL else size
            for row in range(max_row):
                for col in range(max_col):
                    placement = ShipPlacement(name=name, start=Coord(row, col), orientation=orientation)
                    if self._grid.can_place(placement):
                        candidates.append(placement)
        return candidates

    def __repr__(self) -> str:
        return f"Player({self.name!r}, deployed={self.is_deployed}, destroyed={self.destroyed_count})"
