"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, StrEnum, auto

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class ShipName(StrEnum):
    """Ship classes of the standard fleet."""

    TUG = "Tug"
    SUBMARINE = "Submarine"
    DESTROYER = "Destroyer"
    BATTLESHIP = "Battleship"
    AIRCRAFT_CARRIER = "AircraftCarrier"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]

    @property
    def label(self) -> str:
        return "Aircraft Carrier" if self is ShipName.AIRCRAFT_CARRIER else self.value


SHIP_LENGTHS: dict[ShipName, int] = {
    ShipName.TUG: 1,
    ShipName.SUBMARINE: 2,
    ShipName.DESTROYER: 3,
    ShipName.BATTLESHIP: 4,
    ShipName.AIRCRAFT_CARRIER: 5,
}

DEFAULT_FLEET: tuple[ShipName, ...] = (
    ShipName.TUG,
    ShipName.SUBMARINE,
    ShipName.DESTROYER,
    ShipName.BATTLESHIP,
    ShipName.AIRCRAFT_CARRIER,
)


class CellState(IntEnum):
    """What is known about a single grid cell."""

    EMPTY = 0
    SHIP = 1
    HIT = 2
    MISS = 3


class AttackOutcome(StrEnum):
    """Result category of a single attack."""

    HIT = "HIT"
    MISS = "MISS"
    DESTROYED = "DESTROYED"
    GAME_OVER = "GAME_OVER"
    SHOT_ALREADY = "SHOT_ALREADY"

    @property
    def mutates_grid(self) -> bool:
        return self is not AttackOutcome.SHOT_ALREADY

    @property
    def is_hit(self) -> bool:
        return self in (AttackOutcome.HIT, AttackOutcome.DESTROYED, AttackOutcome.GAME_OVER)


class Difficulty(StrEnum):
    """Computer opponent difficulty."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Phase(StrEnum):
    """Battle flow phase of a session."""

    DEPLOYING = "DEPLOYING"
    BATTLE = "BATTLE"
    GAME_OVER = "GAME_OVER"


class Side(StrEnum):
    """Acting party."""

    HUMAN = "HUMAN"
    AI = "AI"

    @property
    def opponent(self) -> Side:
        return Side.AI if self is Side.HUMAN else Side.HUMAN


class GameState(Enum):
    """Screen states driving which input/draw handler is active."""

    QUITTING = auto()
    VIEWING_MAIN_MENU = auto()
    VIEWING_GAME_MENU = auto()
    ALTERING_SETTINGS = auto()
    DEPLOYING = auto()
    DISCOVERING = auto()
    ENDING_GAME = auto()
    VIEWING_HIGH_SCORES = auto()
    VIEWING_HELP = auto()
    VIEWING_MUSIC = auto()


@dataclass(frozen=True, slots=True)
class Coord:
    """Grid coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    name: ShipName
    start: Coord
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class AttackResult:
    """Outcome of one resolved attack."""

    outcome: AttackOutcome
    row: int
    col: int
    ship: ShipName | None = None
    attacker: Side = Side.HUMAN

    @property
    def coord(self) -> Coord:
        return Coord(self.row, self.col)

    @property
    def text(self) -> str:
        if self.outcome is AttackOutcome.HIT:
            return "hit something!"
        if self.outcome is AttackOutcome.MISS:
            return "missed"
        if self.outcome is AttackOutcome.DESTROYED:
            name = self.ship.label if self.ship is not None else "ship"
            return f"destroyed the {name}"
        if self.outcome is AttackOutcome.GAME_OVER:
            return "ended the game"
        return f"have already attacked [{self.row},{self.col}]!"

    def __str__(self) -> str:
        return self.text


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(placement.name.size):
        if placement.orientation is Orientation.HORIZONTAL:
            result.append(Coord(placement.start.row, placement.start.col + i))
        else:
            result.append(Coord(placement.start.row + i, placement.start.col))
    return result
