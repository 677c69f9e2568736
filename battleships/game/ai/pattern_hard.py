"""Hard AI: hunt by ship-placement heat map, then finish ships deterministically."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from battleships.game.ai.strategy import AIStrategy
from battleships.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    AttackOutcome,
    AttackResult,
    Coord,
    Orientation,
    ShipName,
)


def _adjacent(a: Coord, b: Coord) -> bool:
    return abs(a.row - b.row) + abs(a.col - b.col) == 1


class _Hunt:
    """Connected hits that belong to ships not yet sunk."""

    __slots__ = ("hits", "touched")

    def __init__(self, hits: Iterable[Coord], touched: int) -> None:
        self.hits: set[Coord] = set(hits)
        self.touched = touched

    def borders(self, cell: Coord) -> bool:
        return any(_adjacent(cell, hit) for hit in self.hits)

    @property
    def orientation(self) -> Orientation | None:
        if len(self.hits) < 2:
            return None
        if len({hit.row for hit in self.hits}) == 1:
            return Orientation.HORIZONTAL
        if len({hit.col for hit in self.hits}) == 1:
            return Orientation.VERTICAL
        return None

    def line_ends(self) -> tuple[Coord, Coord]:
        """Cells just past both ends of a straight run of hits."""
        first = min(self.hits, key=lambda c: (c.row, c.col))
        last = max(self.hits, key=lambda c: (c.row, c.col))
        if self.orientation is Orientation.HORIZONTAL:
            return Coord(first.row, first.col - 1), Coord(last.row, last.col + 1)
        return Coord(first.row - 1, first.col), Coord(last.row + 1, last.col)

    def sunk_line(self, hit: Coord, length: int) -> set[Coord]:
        """The `length` cells through `hit` that the sunk ship most plausibly occupied."""
        runs: dict[Orientation, list[set[Coord]]] = {Orientation.HORIZONTAL: [], Orientation.VERTICAL: []}
        for offset in range(1 - length, 1):
            across = {Coord(hit.row, hit.col + offset + i) for i in range(length)}
            down = {Coord(hit.row + offset + i, hit.col) for i in range(length)}
            if across <= self.hits:
                runs[Orientation.HORIZONTAL].append(across)
            if down <= self.hits:
                runs[Orientation.VERTICAL].append(down)
        order = [Orientation.HORIZONTAL, Orientation.VERTICAL]
        if self.orientation is Orientation.VERTICAL:
            order.reverse()
        for orientation in order:
            if runs[orientation]:
                return runs[orientation][0]
        return set(self.hits)


def _components(cells: set[Coord]) -> list[set[Coord]]:
    pending = set(cells)
    groups: list[set[Coord]] = []
    while pending:
        stack = [pending.pop()]
        group = set(stack)
        while stack:
            cell = stack.pop()
            linked = {other for other in pending if _adjacent(cell, other)}
            pending -= linked
            group |= linked
            stack.extend(linked)
        groups.append(group)
    return groups


class PatternHardAI(AIStrategy):
    """Scores legal placements of the ships still afloat and works several partial hits at once."""

    def __init__(
        self,
        rng: random.Random,
        size: int = BOARD_SIZE,
        fleet: Sequence[ShipName] = DEFAULT_FLEET,
    ) -> None:
        super().__init__(rng, size)
        self._open = np.ones((size, size), dtype=bool)
        self._afloat: list[int] = sorted((name.size for name in fleet), reverse=True)
        self._hunts: list[_Hunt] = []
        self._clock = 0

    @property
    def remaining_ship_lengths(self) -> tuple[int, ...]:
        return tuple(self._afloat)

    @property
    def active_hunts(self) -> int:
        return len(self._hunts)

    def next_target(self) -> Coord:
        # Biggest, then most recently extended, hunt first.
        for hunt in sorted(self._hunts, key=lambda h: (len(h.hits), h.touched), reverse=True):
            target = self._finish_target(hunt)
            if target is not None:
                return target
        # Every hunt is boxed in by tried cells; go back to searching.
        self._hunts.clear()
        return self._search_target()

    def notify_result(self, result: AttackResult) -> None:
        self._clock += 1
        cell = result.coord
        self._mark_tried(cell)
        if 0 <= cell.row < self._size and 0 <= cell.col < self._size:
            self._open[cell.row, cell.col] = False
        if not result.outcome.is_hit:
            return

        hunt = self._join_hunt(cell)
        if result.outcome is AttackOutcome.HIT:
            return
        length = result.ship.size if result.ship is not None else len(hunt.hits)
        self._retire_length(length)
        self._hunts.remove(hunt)
        leftover = hunt.hits - hunt.sunk_line(cell, length)
        self._hunts.extend(_Hunt(group, hunt.touched) for group in _components(leftover))

    def heat_map(self) -> np.ndarray:
        """How many placements of the ships still afloat cover each untried cell."""
        heat = np.zeros((self._size, self._size), dtype=np.float64)
        for length in self._afloat:
            heat += self._placement_heat(length)
        heat[~self._open] = 0.0
        return heat

    def _placement_heat(self, length: int) -> np.ndarray:
        heat = np.zeros((self._size, self._size), dtype=np.float64)
        if length > self._size:
            return heat
        across = sliding_window_view(self._open, length, axis=1).all(axis=-1)
        down = sliding_window_view(self._open, length, axis=0).all(axis=-1)
        placements = int(across.sum() + down.sum())
        if placements == 0:
            return heat
        for offset in range(length):
            heat[:, offset : offset + across.shape[1]] += across
            heat[offset : offset + down.shape[0], :] += down
        # Ships with few legal spots left weigh more.
        return heat * (length * self._size * self._size / placements)

    def _search_target(self) -> Coord:
        heat = self.heat_map()
        # Every ship longer than one cell covers a checkerboard cell.
        if self._afloat and min(self._afloat) > 1:
            rows, cols = np.indices(heat.shape)
            on_parity = np.where((rows + cols) % 2 == 0, heat, 0.0)
            if on_parity.max() > 0.0:
                heat = on_parity
        peak = float(heat.max())
        if peak <= 0.0:
            return self._random_untried()
        rows, cols = np.nonzero(heat >= peak - 1e-9)
        return self._rng.choice([Coord(int(r), int(c)) for r, c in zip(rows, cols)])

    def _finish_target(self, hunt: _Hunt) -> Coord | None:
        if hunt.orientation is not None:
            ends = [end for end in hunt.line_ends() if self.is_untried(end.row, end.col)]
            if ends:
                return self._hottest(ends)
        around = {cell for hit in hunt.hits for cell in self._neighbours(hit)}
        if around:
            return self._hottest(sorted(around, key=lambda c: (c.row, c.col)))
        return None

    def _hottest(self, cells: list[Coord]) -> Coord:
        if len(cells) == 1:
            return cells[0]
        heat = self.heat_map()
        peak = max(heat[c.row, c.col] for c in cells)
        return self._rng.choice([c for c in cells if heat[c.row, c.col] == peak])

    def _join_hunt(self, cell: Coord) -> _Hunt:
        """Add a hit to the hunt it borders, merging hunts it connects."""
        bordering = [hunt for hunt in self._hunts if hunt.borders(cell)]
        if not bordering:
            hunt = _Hunt({cell}, self._clock)
            self._hunts.append(hunt)
            return hunt
        merged, *others = bordering
        merged.hits.add(cell)
        merged.touched = self._clock
        for other in others:
            merged.hits |= other.hits
            self._hunts.remove(other)
        return merged

    def _retire_length(self, length: int) -> None:
        if not self._afloat:
            return
        # Unknown lengths retire the closest one still afloat.
        closest = length if length in self._afloat else min(self._afloat, key=lambda s: abs(s - length))
        self._afloat.remove(closest)
