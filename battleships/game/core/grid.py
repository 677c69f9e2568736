"""Grid state representation and mutation helpers."""

from __future__ import annotations

import logging

import numpy as np

from battleships.game.core.errors import InvalidTransition, PlacementError, PlacementFailure
from battleships.game.core.models import (
    BOARD_SIZE,
    CellState,
    Coord,
    Orientation,
    ShipName,
    ShipPlacement,
    cells_for_placement,
)
from battleships.game.core.ship import Ship

logger = logging.getLogger(__name__)

_SHOT_NONE = 0
_SHOT_MISS = 1
_SHOT_HIT = 2


class Grid:
    """Numpy-backed grid: a ship-id matrix, a shot matrix and the placed ships."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        if size < 1:
            raise ValueError("grid size must be positive")
        self._size = size
        self._ship_ids = np.zeros((size, size), dtype=np.int16)
        self._shots = np.zeros((size, size), dtype=np.int8)
        self._ships: dict[int, Ship] = {}
        self._ids_by_name: dict[ShipName, int] = {}
        self._next_id = 1

    @property
    def size(self) -> int:
        return self._size

    @property
    def ships(self) -> tuple[Ship, ...]:
        return tuple(self._ships.values())

    @property
    def ships_destroyed(self) -> int:
        return sum(1 for ship in self._ships.values() if ship.is_destroyed)

    @property
    def shots_fired(self) -> int:
        return int(np.count_nonzero(self._shots))

    def in_bounds(self, row: int, col: int) -> bool:
        """Return whether the cell is inside the grid."""
        return 0 <= row < self._size and 0 <= col < self._size

    def has_ship(self, name: ShipName) -> bool:
        return name in self._ids_by_name

    def ship(self, name: ShipName) -> Ship | None:
        ship_id = self._ids_by_name.get(name)
        return self._ships.get(ship_id) if ship_id is not None else None

    def ship_at(self, row: int, col: int) -> Ship | None:
        """Return the ship covering the cell, if any."""
        if not self.in_bounds(row, col):
            return None
        ship_id = int(self._ship_ids[row, col])
        return self._ships.get(ship_id) if ship_id else None

    def cell_state(self, row: int, col: int) -> CellState:
        """Return the state of one cell."""
        if not self.in_bounds(row, col):
            raise IndexError(f"cell ({row}, {col}) is outside the {self._size}x{self._size} grid")
        shot = int(self._shots[row, col])
        if shot == _SHOT_HIT:
            return CellState.HIT
        if shot == _SHOT_MISS:
            return CellState.MISS
        if self._ship_ids[row, col]:
            return CellState.SHIP
        return CellState.EMPTY

    def check_placement(self, placement: ShipPlacement) -> PlacementFailure | None:
        """Return why a placement would be rejected, or None when it fits."""
        own_id = self._ids_by_name.get(placement.name, 0)
        for cell in cells_for_placement(placement):
            if not self.in_bounds(cell.row, cell.col):
                return PlacementFailure.OUT_OF_BOUNDS
        for cell in cells_for_placement(placement):
            occupant = int(self._ship_ids[cell.row, cell.col])
            if occupant and occupant != own_id:
                return PlacementFailure.OVERLAP
        return None

    def can_place(self, placement: ShipPlacement) -> bool:
        return self.check_placement(placement) is None

    def place_ship(self, name: ShipName, start: Coord, orientation: Orientation) -> Ship:
        """Place a ship, relocating it if this name is already on the grid."""
        if self.shots_fired:
            raise InvalidTransition("ships cannot be placed once the battle has started")
        placement = ShipPlacement(name=name, start=start, orientation=orientation)
        failure = self.check_placement(placement)
        if failure is not None:
            raise PlacementError(failure, name)

        self._clear_ship(name)
        ship = Ship(placement)
        ship_id = self._next_id
        self._next_id += 1
        for cell in ship.cells:
            self._ship_ids[cell.row, cell.col] = ship_id
        self._ships[ship_id] = ship
        self._ids_by_name[name] = ship_id
        logger.debug(
            "ship_placed name=%s row=%d col=%d orientation=%s",
            name.value,
            start.row,
            start.col,
            orientation.value,
        )
        return ship

    def remove_ship(self, name: ShipName) -> bool:
        """Remove a ship during deployment. Returns whether one was removed."""
        if self.shots_fired:
            raise InvalidTransition("ships cannot be removed once the battle has started")
        return self._clear_ship(name)

    def clear(self) -> None:
        """Remove every ship and shot."""
        self._ship_ids.fill(0)
        self._shots.fill(_SHOT_NONE)
        self._ships.clear()
        self._ids_by_name.clear()

    def mark_miss(self, row: int, col: int) -> None:
        """Record a shot into open water."""
        if self._ship_ids[row, col] or self._shots[row, col]:
            raise InvalidTransition(f"cell ({row}, {col}) cannot be marked as a miss")
        self._shots[row, col] = _SHOT_MISS

    def mark_hit(self, row: int, col: int) -> Ship:
        """Record a shot on a ship cell and damage that ship."""
        ship = self.ship_at(row, col)
        if ship is None or self._shots[row, col]:
            raise InvalidTransition(f"cell ({row}, {col}) cannot be marked as a hit")
        self._shots[row, col] = _SHOT_HIT
        ship.hit()
        return ship

    def all_ships_destroyed(self) -> bool:
        """Return whether every placed ship has been destroyed."""
        return bool(self._ships) and all(ship.is_destroyed for ship in self._ships.values())

    def view(self, *, reveal_ships: bool = False) -> np.ndarray:
        """Return a matrix of CellState values for presentation."""
        view = np.full((self._size, self._size), int(CellState.EMPTY), dtype=np.int8)
        if reveal_ships:
            view[self._ship_ids != 0] = int(CellState.SHIP)
        view[self._shots == _SHOT_MISS] = int(CellState.MISS)
        view[self._shots == _SHOT_HIT] = int(CellState.HIT)
        return view

    def _clear_ship(self, name: ShipName) -> bool:
        ship_id = self._ids_by_name.pop(name, None)
        if ship_id is None:
            return False
        self._ship_ids[self._ship_ids == ship_id] = 0
        del self._ships[ship_id]
        return True
