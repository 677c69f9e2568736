from __future__ import annotations

import random
from collections.abc import Iterable

import pytest

from battleships.game.ai.strategy import AIStrategy
from battleships.game.core.models import AttackResult, Coord, Orientation, ShipName, ShipPlacement
from battleships.game.core.player import Player
from battleships.game.core.session import GameSession


def make_valid_fleet() -> list[ShipPlacement]:
    return [
        ShipPlacement(ShipName.TUG, Coord(0, 0), Orientation.HORIZONTAL),
        ShipPlacement(ShipName.SUBMARINE, Coord(2, 0), Orientation.HORIZONTAL),
        ShipPlacement(ShipName.DESTROYER, Coord(4, 0), Orientation.HORIZONTAL),
        ShipPlacement(ShipName.BATTLESHIP, Coord(6, 0), Orientation.HORIZONTAL),
        ShipPlacement(ShipName.AIRCRAFT_CARRIER, Coord(8, 0), Orientation.HORIZONTAL),
    ]


def make_player(name: str = "Player", fleet: Iterable[ShipPlacement] | None = None) -> Player:
    player = Player(name)
    for placement in fleet if fleet is not None else make_valid_fleet():
        player.place_ship(placement.name, placement.start, placement.orientation)
    return player


class ScriptedStrategy(AIStrategy):
    """Attacks a fixed list of cells in order and records what it is told."""

    def __init__(self, targets: Iterable[Coord]) -> None:
        super().__init__(random.Random(0))
        self._targets = list(targets)
        self.notified: list[AttackResult] = []

    def next_target(self) -> Coord:
        return self._targets.pop(0)

    def notify_result(self, result: AttackResult) -> None:
        self._mark_tried(result.coord)
        self.notified.append(result)


@pytest.fixture
def valid_fleet() -> list[ShipPlacement]:
    return make_valid_fleet()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def session_factory():
    def _make(ai_targets: Iterable[Coord] = (), start_battle: bool = True) -> GameSession:
        session = GameSession(make_player("Human"), make_player("Computer"), ScriptedStrategy(ai_targets))
        if start_battle:
            session.end_deployment()
        return session

    return _make


@pytest.fixture
def player_factory():
    return make_player
