from battleships.game.core.models import (
    DEFAULT_FLEET,
    AttackOutcome,
    AttackResult,
    Coord,
    Orientation,
    ShipName,
    ShipPlacement,
    Side,
    cells_for_placement,
)


def test_ship_name_size_mapping() -> None:
    assert ShipName.TUG.size == 1
    assert ShipName.SUBMARINE.size == 2
    assert ShipName.DESTROYER.size == 3
    assert ShipName.BATTLESHIP.size == 4
    assert ShipName.AIRCRAFT_CARRIER.size == 5
    assert sum(name.size for name in DEFAULT_FLEET) == 15


def test_cells_for_placement_horizontal_and_vertical() -> None:
    horizontal = ShipPlacement(ShipName.DESTROYER, Coord(1, 2), Orientation.HORIZONTAL)
    vertical = ShipPlacement(ShipName.DESTROYER, Coord(1, 2), Orientation.VERTICAL)
    assert cells_for_placement(horizontal) == [Coord(1, 2), Coord(1, 3), Coord(1, 4)]
    assert cells_for_placement(vertical) == [Coord(1, 2), Coord(2, 2), Coord(3, 2)]


def test_attack_result_text_and_flags() -> None:
    destroyed = AttackResult(AttackOutcome.DESTROYED, 2, 4, ship=ShipName.AIRCRAFT_CARRIER)
    assert destroyed.text == "destroyed the Aircraft Carrier"
    assert str(AttackResult(AttackOutcome.SHOT_ALREADY, 2, 2)) == "have already attacked [2,2]!"
    assert AttackResult(AttackOutcome.MISS, 0, 0).coord == Coord(0, 0)
    assert AttackOutcome.GAME_OVER.is_hit
    assert not AttackOutcome.MISS.is_hit
    assert not AttackOutcome.SHOT_ALREADY.mutates_grid
    assert Side.HUMAN.opponent is Side.AI
