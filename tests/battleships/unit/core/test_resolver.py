from battleships.game.core.models import (
    AttackOutcome,
    CellState,
    Coord,
    Orientation,
    ShipName,
    ShipPlacement,
    Side,
)
from battleships.game.core.resolver import resolve_attack


def _sink_all_but(player, keep: ShipName) -> None:
    for ship in player.ships:
        if ship.name is keep:
            continue
        for cell in ship.cells:
            resolve_attack(player, cell.row, cell.col)


def test_destroyer_scenario_ends_game_and_rejects_repeat(player_factory) -> None:
    defender = player_factory(
        fleet=[
            ShipPlacement(ShipName.TUG, Coord(0, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipName.SUBMARINE, Coord(9, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipName.DESTROYER, Coord(2, 2), Orientation.HORIZONTAL),
            ShipPlacement(ShipName.BATTLESHIP, Coord(6, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipName.AIRCRAFT_CARRIER, Coord(8, 0), Orientation.HORIZONTAL),
        ]
    )
    _sink_all_but(defender, ShipName.DESTROYER)

    assert resolve_attack(defender, 2, 2).outcome is AttackOutcome.HIT
    assert resolve_attack(defender, 2, 3).outcome is AttackOutcome.HIT
    last = resolve_attack(defender, 2, 4)
    assert last.outcome is AttackOutcome.GAME_OVER
    assert last.ship is ShipName.DESTROYER
    assert defender.is_destroyed
    assert resolve_attack(defender, 2, 2).outcome is AttackOutcome.SHOT_ALREADY
    assert defender.grid.cell_state(2, 2) is CellState.HIT


def test_repeat_attack_is_shot_already_without_mutation(player_factory) -> None:
    defender = player_factory()
    first = resolve_attack(defender, 0, 0)
    assert first.outcome in (AttackOutcome.HIT, AttackOutcome.DESTROYED)
    before = defender.grid.view(reveal_ships=True).copy()
    again = resolve_attack(defender, 0, 0)
    assert again.outcome is AttackOutcome.SHOT_ALREADY
    assert (before == defender.grid.view(reveal_ships=True)).all()

    miss = resolve_attack(defender, 1, 1)
    assert miss.outcome is AttackOutcome.MISS
    assert resolve_attack(defender, 1, 1).outcome is AttackOutcome.SHOT_ALREADY
    assert defender.grid.cell_state(1, 1) is CellState.MISS


def test_empty_cell_is_miss(player_factory) -> None:
    defender = player_factory()
    result = resolve_attack(defender, 1, 9, attacker=Side.AI)
    assert result.outcome is AttackOutcome.MISS
    assert result.attacker is Side.AI
    assert result.ship is None
    assert defender.grid.cell_state(1, 9) is CellState.MISS


def test_destroying_a_ship_before_the_last_is_destroyed_not_game_over(player_factory) -> None:
    defender = player_factory()
    tug = resolve_attack(defender, 0, 0)
    assert tug.outcome is AttackOutcome.DESTROYED
    assert tug.ship is ShipName.TUG
    assert resolve_attack(defender, 2, 0).outcome is AttackOutcome.HIT
    assert resolve_attack(defender, 2, 1).outcome is AttackOutcome.DESTROYED
    assert defender.destroyed_count == 2
    assert not defender.is_destroyed


def test_out_of_bounds_attack_is_shot_already(player_factory) -> None:
    defender = player_factory()
    assert resolve_attack(defender, -1, 0).outcome is AttackOutcome.SHOT_ALREADY
    assert resolve_attack(defender, 0, 10).outcome is AttackOutcome.SHOT_ALREADY
    assert defender.grid.shots_fired == 0


def test_resolution_is_deterministic(player_factory) -> None:
    first = player_factory()
    second = player_factory()
    for row, col in ((4, 0), (4, 5), (8, 4), (4, 5)):
        assert resolve_attack(first, row, col) == resolve_attack(second, row, col)
