"""Placement and damage state of one vessel."""

from __future__ import annotations

from battleships.game.core.models import Coord, Orientation, ShipName, ShipPlacement, cells_for_placement


class Ship:
    """A deployed ship; destroyed once every cell has been hit."""

    __slots__ = ("_placement", "_cells", "_hits")

    def __init__(self, placement: ShipPlacement) -> None:
        self._placement = placement
        self._cells = tuple(cells_for_placement(placement))
        self._hits = 0

    @property
    def name(self) -> ShipName:
        return self._placement.name

    @property
    def size(self) -> int:
        return self._placement.name.size

    @property
    def placement(self) -> ShipPlacement:
        return self._placement

    @property
    def start(self) -> Coord:
        return self._placement.start

    @property
    def orientation(self) -> Orientation:
        return self._placement.orientation

    @property
    def cells(self) -> tuple[Coord, ...]:
        return self._cells

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def is_destroyed(self) -> bool:
        return self._hits == self.size

    def hit(self) -> None:
        """Register one hit on this ship."""
        if self.is_destroyed:
            raise RuntimeError(f"{self.name.label} is already destroyed.")
        self._hits += 1

    def occupies(self, coord: Coord) -> bool:
        return coord in self._cells

    def __repr__(self) -> str:
        return f"Ship({self.name.value}, start={self.start}, {self.orientation.value}, hits={self._hits})"
